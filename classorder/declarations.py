"""
Dependency declaration sources and their line grammar.

A declaration lists the classes that must be applied before the declaring
class. Each line may carry a comment started by ``#`` or ``;``; what remains
is split on whitespace into class names.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

_COMMENT = re.compile(r"[#;].*$", re.DOTALL)

DeclarationLines = Union[str, Sequence[str]]
EligibilityPolicy = Callable[[Path], bool]


class DeclarationSource(Protocol):
    """
    Anything that can look up the declaration lines of a class.

    `lines_for` returns None when the class has no eligible declaration.
    """

    def lines_for(self, class_name: str) -> Optional[List[str]]:
        ...


def _as_lines(text_or_lines: DeclarationLines) -> List[str]:
    if isinstance(text_or_lines, str):
        return text_or_lines.splitlines()
    return [str(line) for line in text_or_lines]


def parse_declaration_line(line: str) -> List[str]:
    """
    Parse one declaration line into class names.

    Args:
        line: Raw text line.

    Returns:
        Class names in the order they appear; empty for blank or comment-only
        lines.
    """
    content = _COMMENT.sub("", str(line)).strip()
    if not content:
        return []
    return content.split()


def parse_declaration(text_or_lines: DeclarationLines) -> List[str]:
    """
    Parse a whole declaration.

    Args:
        text_or_lines: Declaration text or its lines.

    Returns:
        All class names of all lines, in order. Repeated names are kept.
    """
    names: List[str] = []
    for line in _as_lines(text_or_lines):
        names.extend(parse_declaration_line(line))
    return names


def parse_class_list(text_or_lines: DeclarationLines) -> List[str]:
    """
    Split a class list into names.

    Newline separated files and space separated values are both accepted.
    Duplicates are kept; the graph builder drops them.
    """
    names: List[str] = []
    for line in _as_lines(text_or_lines):
        names.extend(line.split())
    return names


def read_class_list(path: Union[str, Path]) -> List[str]:
    """
    Read the initial class list from a file.

    Args:
        path: Path to a file with class names.

    Returns:
        Class names in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Class list {str(path)!r} does not exist")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Cannot read class list {str(path)!r}: {exc}") from exc
    return parse_class_list(text)


def write_class_list(order: Iterable[str], path: Union[str, Path]) -> None:
    """
    Write classes one per line. ``"-"`` writes to standard output.
    """
    text = "".join(f"{name}\n" for name in order)
    if str(path) == "-":
        sys.stdout.write(text)
        return
    Path(path).write_text(text, encoding="utf-8")


def is_eligible_declaration(path: Path) -> bool:
    """
    Default eligibility policy for declaration files.

    A declaration is read only when it is a regular file and not executable.
    Executable files next to declarations are class scripts.
    """
    return path.is_file() and not os.access(path, os.X_OK)


class MappingDeclarationSource:
    """
    In-memory declaration source.

    Values may be a single string or a sequence of lines.
    """

    def __init__(self, declarations: Mapping[str, DeclarationLines]) -> None:
        self._declarations = dict(declarations)

    def lines_for(self, class_name: str) -> Optional[List[str]]:
        if class_name not in self._declarations:
            return None
        return _as_lines(self._declarations[class_name])


class DirectoryDeclarationSource:
    """
    Declaration source backed by a directory of ``<CLASS><suffix>`` files.
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        *,
        suffix: str = ".deps",
        policy: EligibilityPolicy = is_eligible_declaration,
    ) -> None:
        """
        Initialize the source.

        Args:
            base_dir: Directory holding declaration files.
            suffix: File name suffix appended to the class name.
            policy: Predicate deciding whether a candidate file is read.

        Raises:
            FileNotFoundError: If base_dir is not a directory.
            ValueError: If suffix is empty.
        """
        base_dir = Path(base_dir)
        if not base_dir.is_dir():
            raise FileNotFoundError(f"Class directory {str(base_dir)!r} does not exist")
        if not suffix:
            raise ValueError("suffix cannot be empty")
        self.base_dir = base_dir
        self.suffix = str(suffix)
        self.policy = policy

    def path_for(self, class_name: str) -> Path:
        return self.base_dir / f"{class_name}{self.suffix}"

    def lines_for(self, class_name: str) -> Optional[List[str]]:
        """
        Read the declaration of a class.

        Returns:
            The declaration lines, or None when no eligible file exists.

        Raises:
            OSError: If an eligible file cannot be read.
        """
        path = self.path_for(class_name)
        if not self.policy(path):
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Cannot read declaration {str(path)!r}: {exc}") from exc
        logger.debug("Read declaration %s", path)
        return text.splitlines()
