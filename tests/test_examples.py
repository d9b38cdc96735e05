"""
Smoke tests for the example scripts.

Each example is run in a subprocess and its printed order is checked.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


def _run_example(name: str) -> str:
    result = subprocess.run(
        [sys.executable, str(EXAMPLES_DIR / name)],
        cwd=str(EXAMPLES_DIR.parent),
        env={**os.environ, "PYTHONPATH": str(EXAMPLES_DIR.parent)},
        capture_output=True,
        text=True,
        timeout=120,
    )
    assert result.returncode == 0, result.stderr
    return result.stdout


class TestExamples:
    """Run the bundled examples."""

    def test_basic_order(self) -> None:
        """Print the ordered WORDPRESS stack."""
        out = _run_example("example_1_basic_order.py")

        assert "Final order:    DEFAULT LINUX WEBSERVER VHOST POSTGRES WORDPRESS LAST" in out

    def test_cycle_detection(self) -> None:
        """Print the cycle and order it after its dependency."""
        out = _run_example("example_cycle_detection.py")

        assert "Final order: DEFAULT DATABASE MAIL SPAMFILTER LAST" in out
        assert ("MAIL-SPAMFILTER" in out) or ("SPAMFILTER-MAIL" in out)

    @pytest.mark.skipif(os.name != "posix", reason="relies on POSIX file modes")
    def test_class_directory(self) -> None:
        """Print one class per line."""
        out = _run_example("example_class_directory.py")

        assert out.rstrip().endswith("DEFAULT\nWEBSERVER\nVHOST\nPOSTGRES\nWORDPRESS")
