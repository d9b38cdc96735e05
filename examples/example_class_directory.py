#!/usr/bin/env python3
"""
Example: Ordering from a Class Directory

Declarations are read from <CLASS>.deps files. Executable files in the same
directory are class scripts and are never read as declarations.
"""

import sys
import os
import tempfile
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classorder import DirectoryDeclarationSource, compute_class_order, write_class_list

print("=" * 60)
print("Example: Ordering from a Class Directory")
print("=" * 60)

with tempfile.TemporaryDirectory() as tmp:
    class_dir = Path(tmp) / "class"
    class_dir.mkdir()
    (class_dir / "WORDPRESS.deps").write_text("VHOST POSTGRES\n", encoding="utf-8")
    (class_dir / "VHOST.deps").write_text("# the web server comes first\nWEBSERVER\n", encoding="utf-8")
    os.chmod(class_dir / "WORDPRESS.deps", 0o644)
    os.chmod(class_dir / "VHOST.deps", 0o644)

    result = compute_class_order(["DEFAULT", "WORDPRESS"], DirectoryDeclarationSource(class_dir))

    print("\nFinal order:")
    write_class_list(result.order, "-")
