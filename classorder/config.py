"""
Run configuration for the command line tool.

Values come from the provisioning environment and may be overridden
explicitly (for example by command line flags).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from classorder.declarations import parse_class_list, read_class_list

ENV_CLASSES = "classes"
ENV_CONFIG_SPACE = "FAI"
ENV_LOGDIR = "LOGDIR"
CLASS_SUBDIR = "class"
CLASSES_FILENAME = "FAI_CLASSES"
STDOUT = "-"

OutputTarget = Union[Path, str]


@dataclass(frozen=True)
class OrderConfig:
    """
    Configuration of one ordering run.

    Attributes:
        class_dir: Directory holding ``<CLASS><suffix>`` declaration files.
        classes: Initial classes given directly. Takes precedence over
            classes_file when non-empty.
        classes_file: File with the initial classes.
        output: Where the final order is written; ``"-"`` for stdout. None
            means the classes file is rewritten in place.
        suffix: Declaration file suffix.
        debug: Dump the graph and class list to the log.
        plot: Optional image path for a rendering of the dependency graph.
    """

    class_dir: Optional[Path] = None
    classes: Tuple[str, ...] = ()
    classes_file: Optional[Path] = None
    output: Optional[OutputTarget] = None
    suffix: str = ".deps"
    debug: bool = False
    plot: Optional[Path] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: object,
    ) -> "OrderConfig":
        """
        Build a configuration from environment variables.

        ``classes`` holds a space separated class list, ``$FAI/class`` is the
        declaration directory and ``$LOGDIR/FAI_CLASSES`` the classes file.
        Overrides that are None are ignored.

        Args:
            environ: Environment mapping. Defaults to os.environ.
            **overrides: Field values taking precedence over the environment.

        Returns:
            OrderConfig instance.

        Raises:
            TypeError: If an override names an unknown field.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get(ENV_CLASSES, "").strip():
            config = replace(config, classes=tuple(parse_class_list(env[ENV_CLASSES])))
        if env.get(ENV_CONFIG_SPACE):
            config = replace(config, class_dir=Path(env[ENV_CONFIG_SPACE]) / CLASS_SUBDIR)
        if env.get(ENV_LOGDIR):
            config = replace(config, classes_file=Path(env[ENV_LOGDIR]) / CLASSES_FILENAME)

        explicit = {k: v for k, v in overrides.items() if v is not None}
        if "classes" in explicit:
            explicit["classes"] = tuple(explicit["classes"])  # type: ignore[arg-type]
        for key in ("class_dir", "classes_file", "plot"):
            if key in explicit:
                explicit[key] = Path(explicit[key])  # type: ignore[arg-type]
        if "output" in explicit and str(explicit["output"]) != STDOUT:
            explicit["output"] = Path(explicit["output"])  # type: ignore[arg-type]
        return replace(config, **explicit)

    def validate(self) -> None:
        """
        Check that the configuration is usable.

        Raises:
            ValueError: If a required value is missing.
        """
        if self.class_dir is None:
            raise ValueError(
                f"No class directory configured (set ${ENV_CONFIG_SPACE} or --class-dir)"
            )
        if not self.classes and self.classes_file is None:
            raise ValueError(
                f"No classes configured (set ${ENV_CLASSES}, ${ENV_LOGDIR} or --classes-file)"
            )
        if not self.suffix:
            raise ValueError("suffix cannot be empty")
        if self.output is None and self.classes_file is None:
            raise ValueError("No output configured (use --output or --classes-file)")

    def load_classes(self) -> Tuple[str, ...]:
        """
        Return the initial class list.

        Raises:
            FileNotFoundError: If the classes file is needed but missing.
        """
        if self.classes:
            return self.classes
        if self.classes_file is None:
            raise ValueError("No classes configured")
        return tuple(read_class_list(self.classes_file))

    @property
    def output_target(self) -> OutputTarget:
        if self.output is not None:
            return self.output
        if self.classes_file is None:
            raise ValueError("No output configured")
        return self.classes_file
