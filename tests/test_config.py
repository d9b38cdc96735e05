"""
Unit tests for run configuration.
"""

from pathlib import Path

import pytest

from classorder.config import OrderConfig


class TestOrderConfig:
    """Test suite for OrderConfig."""

    def test_from_env_reads_provisioning_variables(self) -> None:
        """Derive class list, class directory and classes file from the environment."""
        config = OrderConfig.from_env(
            {"classes": "DEFAULT  LINUX\nAMD64", "FAI": "/srv/fai/config", "LOGDIR": "/tmp/fai"}
        )

        assert config.classes == ("DEFAULT", "LINUX", "AMD64")
        assert config.class_dir == Path("/srv/fai/config/class")
        assert config.classes_file == Path("/tmp/fai/FAI_CLASSES")
        assert config.output_target == Path("/tmp/fai/FAI_CLASSES")

    def test_overrides_win_over_environment(self) -> None:
        """Prefer explicit values and ignore None overrides."""
        config = OrderConfig.from_env(
            {"FAI": "/srv/fai/config", "LOGDIR": "/tmp/fai"},
            class_dir="/opt/classes",
            classes_file=None,
            output="-",
            suffix=".requires",
        )

        assert config.class_dir == Path("/opt/classes")
        assert config.classes_file == Path("/tmp/fai/FAI_CLASSES")
        assert config.output == "-"
        assert config.output_target == "-"
        assert config.suffix == ".requires"

    def test_output_path_is_converted(self) -> None:
        """Convert output strings other than '-' to paths."""
        config = OrderConfig.from_env({}, output="result.txt")

        assert config.output == Path("result.txt")

    def test_unknown_override_raises(self) -> None:
        """Reject fields that do not exist."""
        with pytest.raises(TypeError):
            OrderConfig.from_env({}, colour="blue")

    def test_validate_requires_class_dir(self) -> None:
        """Raise ValueError without a class directory."""
        config = OrderConfig(classes=("A",), output="-")

        with pytest.raises(ValueError, match="class directory"):
            config.validate()

    def test_validate_requires_classes(self) -> None:
        """Raise ValueError without a class source."""
        config = OrderConfig(class_dir=Path("/srv/class"), output="-")

        with pytest.raises(ValueError, match="No classes"):
            config.validate()

    def test_validate_requires_output(self) -> None:
        """Raise ValueError without output and classes file."""
        config = OrderConfig(class_dir=Path("/srv/class"), classes=("A",))

        with pytest.raises(ValueError, match="No output"):
            config.validate()

    def test_load_classes_prefers_direct_list(self, tmp_path) -> None:
        """Use the direct class list before the classes file."""
        path = tmp_path / "FAI_CLASSES"
        path.write_text("FROM_FILE\n", encoding="utf-8")

        assert OrderConfig(classes=("A", "B"), classes_file=path).load_classes() == ("A", "B")
        assert OrderConfig(classes_file=path).load_classes() == ("FROM_FILE",)

    def test_load_classes_missing_file_raises(self, tmp_path) -> None:
        """Raise FileNotFoundError for a missing classes file."""
        config = OrderConfig(classes_file=tmp_path / "missing")

        with pytest.raises(FileNotFoundError):
            config.load_classes()
