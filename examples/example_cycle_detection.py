#!/usr/bin/env python3
"""
Example: Cycle Detection and Block Ordering

The following is demonstrated:
- How dependency cycles are detected and reported
- How a cycle is ordered as one block after everything it depends on
- How members of a cycle keep their original order
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classorder import MappingDeclarationSource, compute_class_order, format_cycle
from classorder.diagnostics import DiagnosticsReport

print("=" * 60)
print("Example: Cycle Detection and Block Ordering")
print("=" * 60)

# MAIL and SPAMFILTER need each other, SPAMFILTER also needs DATABASE.
classes = ["DEFAULT", "MAIL", "SPAMFILTER", "LAST"]
declarations = MappingDeclarationSource(
    {
        "MAIL": "SPAMFILTER",
        "SPAMFILTER": "MAIL DATABASE",
    }
)

result = compute_class_order(classes, declarations, report_cycles=True)

print("\nCycles:")
for cycle in result.cycles:
    print(f"  {format_cycle(cycle)}")

print(f"\nFinal order: {' '.join(result.order)}")

report = DiagnosticsReport.from_result(result)
print("\nDiagnostics:")
for line in report.summary_lines():
    print(f"  {line}")
