#!/usr/bin/env python3
"""
Example 1: Basic Dependency Ordering

This example demonstrates the core functionality:
- Declaring dependencies between classes
- Discovering classes named only in declarations
- Computing an order that keeps the original order where possible
"""

import sys
import os

# The parent directory is added to the import path.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classorder import MappingDeclarationSource, compute_class_order
from classorder.diagnostics import describe_graph

print("=" * 60)
print("Example 1: Basic Dependency Ordering")
print("=" * 60)

# Classes as selected for a host, in their original order.
classes = ["DEFAULT", "LINUX", "WORDPRESS", "LAST"]

# WORDPRESS needs a virtual host and a database; the virtual host needs a web
# server. VHOST, POSTGRES and WEBSERVER are not selected explicitly.
declarations = MappingDeclarationSource(
    {
        "WORDPRESS": "VHOST POSTGRES   # web and database",
        "VHOST": "WEBSERVER",
        "POSTGRES": "; no dependencies",
    }
)

result = compute_class_order(classes, declarations)

print("\nDependency graph:")
for line in describe_graph(result.graph, result.classes):
    print(f"  {line}")

print(f"\nOriginal order: {' '.join(result.classes)}")
print(f"Final order:    {' '.join(result.order)}")
print(f"Moved classes:  {' '.join(result.moved())}")
