"""
Command line entry point.

Reads the initial class list and the declaration directory, computes the
class order and writes it one class per line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from classorder.config import OrderConfig
from classorder.declarations import DirectoryDeclarationSource, parse_class_list, write_class_list
from classorder.diagnostics import DiagnosticsReport, describe_classes, describe_graph
from classorder.order import OrderResult, compute_class_order

logger = logging.getLogger("classorder")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classorder",
        description=(
            "Order classes so that every class comes after the classes it depends on, "
            "changing the original order as little as possible."
        ),
    )
    parser.add_argument(
        "--class-dir", type=str, default=None,
        help="Directory with <CLASS>.deps files (default: $FAI/class)",
    )
    parser.add_argument(
        "--classes-file", type=str, default=None,
        help="File with the initial classes (default: $LOGDIR/FAI_CLASSES)",
    )
    parser.add_argument(
        "--classes", type=str, default=None,
        help="Space separated initial classes (default: $classes)",
    )
    parser.add_argument(
        "-o", "--output", type=str, default=None,
        help="Output file, '-' for stdout (default: rewrite the classes file)",
    )
    parser.add_argument("--suffix", type=str, default=None, help="Declaration file suffix (default: .deps)")
    parser.add_argument(
        "--plot", type=str, default=None,
        help="Save a drawing of the dependency graph to this image file",
    )
    parser.add_argument(
        "-d", "--debug", action="store_true",
        help="Print the dependency graph and the class list",
    )
    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _save_plot(result: OrderResult, path: Path) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from classorder.visualization import DependencyGraphVisualizer

    ax = DependencyGraphVisualizer.dependency_graph(
        result.graph, result.order, components=result.components
    )
    ax.figure.savefig(path, bbox_inches="tight")
    plt.close(ax.figure)
    logger.info("Dependency graph drawn to %s", path)


def run(config: OrderConfig) -> OrderResult:
    """
    Run one ordering with a configuration and write the result.

    Raises:
        ValueError: If the configuration is incomplete.
        OSError: If a required input cannot be read or the output written.
    """
    config.validate()
    classes = config.load_classes()
    source = DirectoryDeclarationSource(config.class_dir, suffix=config.suffix)  # type: ignore[arg-type]
    result = compute_class_order(classes, source, log=logger)

    if config.debug:
        logger.info("Classes: %s", describe_classes(result.classes))
        for line in describe_graph(result.graph, result.classes):
            logger.info("Graph: %s", line)
        for line in DiagnosticsReport.from_result(result).summary_lines():
            logger.debug("%s", line)

    write_class_list(result.order, config.output_target)
    if config.plot is not None:
        _save_plot(result, config.plot)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.debug)

    classes: Optional[List[str]] = None
    if args.classes is not None:
        classes = parse_class_list(args.classes)

    try:
        config = OrderConfig.from_env(
            class_dir=args.class_dir,
            classes=classes,
            classes_file=args.classes_file,
            output=args.output,
            suffix=args.suffix,
            plot=args.plot,
            debug=args.debug or None,
        )
        run(config)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
