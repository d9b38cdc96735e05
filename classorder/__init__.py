"""
Dependency-aware ordering of configuration classes.

Computes the order in which configuration classes are applied so that every
class follows the classes it depends on, while keeping the original order
wherever possible. Dependency cycles are detected, reported and ordered as a
single unit.
"""

__version__ = "1.0.0"

from classorder.components import ComponentAnalyzer
from classorder.cycles import CycleReporter, format_cycle
from classorder.declarations import (
    DirectoryDeclarationSource,
    MappingDeclarationSource,
    is_eligible_declaration,
    parse_class_list,
    parse_declaration,
    parse_declaration_line,
    read_class_list,
    write_class_list,
)
from classorder.diagnostics import DiagnosticsReport
from classorder.graph import BuildResult, DependencyGraphBuilder
from classorder.order import OrderResult, compute_class_order
from classorder.sorter import OrderPreservingSorter, sort_classes

__all__ = [
    "BuildResult",
    "ComponentAnalyzer",
    "CycleReporter",
    "DependencyGraphBuilder",
    "DiagnosticsReport",
    "DirectoryDeclarationSource",
    "MappingDeclarationSource",
    "OrderPreservingSorter",
    "OrderResult",
    "compute_class_order",
    "format_cycle",
    "is_eligible_declaration",
    "parse_class_list",
    "parse_declaration",
    "parse_declaration_line",
    "read_class_list",
    "sort_classes",
    "write_class_list",
]
