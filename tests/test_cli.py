"""
Tests for the command line entry point.
"""

import logging
import os

import matplotlib

matplotlib.use("Agg")

import pytest

from classorder.cli import build_parser, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ("classes", "FAI", "LOGDIR"):
        monkeypatch.delenv(name, raising=False)


def _class_dir(tmp_path):
    class_dir = tmp_path / "class"
    class_dir.mkdir()
    for name, text in {
        "WORDPRESS.deps": "VHOST POSTGRES\n",
        "VHOST.deps": "WEBSERVER\n",
        "POSTGRES.deps": "",
    }.items():
        (class_dir / name).write_text(text, encoding="utf-8")
        os.chmod(class_dir / name, 0o644)
    return class_dir


class TestMain:
    """Test suite for the classorder command."""

    def test_rewrites_classes_file_in_place(self, tmp_path) -> None:
        """Replace the classes file with the ordered list by default."""
        class_dir = _class_dir(tmp_path)
        classes_file = tmp_path / "FAI_CLASSES"
        classes_file.write_text("DEFAULT\nWORDPRESS\n", encoding="utf-8")

        code = main(["--class-dir", str(class_dir), "--classes-file", str(classes_file)])

        assert code == 0
        assert classes_file.read_text(encoding="utf-8") == (
            "DEFAULT\nWEBSERVER\nVHOST\nPOSTGRES\nWORDPRESS\n"
        )

    def test_writes_to_stdout(self, tmp_path, capsys) -> None:
        """Print the order for '-o -'."""
        class_dir = _class_dir(tmp_path)

        code = main(["--class-dir", str(class_dir), "--classes", "WORDPRESS", "-o", "-"])

        assert code == 0
        assert capsys.readouterr().out == "WEBSERVER\nVHOST\nPOSTGRES\nWORDPRESS\n"

    def test_reads_environment(self, tmp_path, monkeypatch) -> None:
        """Fall back to the provisioning environment."""
        _class_dir(tmp_path)
        logdir = tmp_path / "log"
        logdir.mkdir()
        monkeypatch.setenv("FAI", str(tmp_path))
        monkeypatch.setenv("LOGDIR", str(logdir))
        monkeypatch.setenv("classes", "WORDPRESS")

        assert main([]) == 0
        assert (logdir / "FAI_CLASSES").read_text(encoding="utf-8") == (
            "WEBSERVER\nVHOST\nPOSTGRES\nWORDPRESS\n"
        )

    def test_cycle_is_not_fatal(self, tmp_path, caplog) -> None:
        """Order cyclic classes and exit successfully."""
        class_dir = tmp_path / "class"
        class_dir.mkdir()
        (class_dir / "A.deps").write_text("B\n", encoding="utf-8")
        (class_dir / "B.deps").write_text("A\n", encoding="utf-8")
        os.chmod(class_dir / "A.deps", 0o644)
        os.chmod(class_dir / "B.deps", 0o644)
        output = tmp_path / "out"

        code = main(["--class-dir", str(class_dir), "--classes", "A B", "-o", str(output)])

        assert code == 0
        assert output.read_text(encoding="utf-8") == "A\nB\n"
        assert any("Cycle:" in r.getMessage() for r in caplog.records)

    def test_missing_class_dir_fails_without_output(self, tmp_path) -> None:
        """Exit with status 1 and write nothing when inputs are missing."""
        output = tmp_path / "out"

        code = main(
            ["--class-dir", str(tmp_path / "missing"), "--classes", "A", "-o", str(output)]
        )

        assert code == 1
        assert not output.exists()

    def test_missing_classes_file_fails(self, tmp_path) -> None:
        """Exit with status 1 for a missing classes file."""
        class_dir = _class_dir(tmp_path)

        code = main(
            ["--class-dir", str(class_dir), "--classes-file", str(tmp_path / "missing")]
        )

        assert code == 1

    def test_unconfigured_run_fails(self) -> None:
        """Exit with status 1 without any configuration."""
        assert main([]) == 1

    def test_debug_and_plot(self, tmp_path, caplog) -> None:
        """Dump the graph and save a drawing on request."""
        caplog.set_level(logging.DEBUG)
        class_dir = _class_dir(tmp_path)
        plot = tmp_path / "graph.png"

        code = main(
            [
                "--class-dir",
                str(class_dir),
                "--classes",
                "WORDPRESS",
                "-o",
                str(tmp_path / "out"),
                "--plot",
                str(plot),
                "--debug",
            ]
        )

        assert code == 0
        assert plot.exists()
        messages = [r.getMessage() for r in caplog.records]
        assert "Graph: WORDPRESS: VHOST POSTGRES" in messages
        assert "Classes: WORDPRESS VHOST POSTGRES WEBSERVER" in messages


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.class_dir is None
    assert args.output is None
    assert args.debug is False
