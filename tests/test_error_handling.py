"""Tests for error handling and artifact I/O helpers."""

import logging

import pytest

from wavelab.error_handling import (
    ErrorLevel,
    ExportError,
    RasterizationError,
    ValidationError,
    WaveLabError,
    error_context,
    handle_error,
)
from wavelab.io import atomic_write, setup_logging, write_artifact


@pytest.mark.fast
class TestWaveLabError:
    def test_str_includes_cause(self):
        error = ExportError("write failed", cause=OSError("disk full"))
        assert str(error) == "write failed (caused by: disk full)"

    def test_context_defaults_to_empty(self):
        assert ValidationError("bad").context == {}


@pytest.mark.fast
class TestHandleError:
    """Tests for handle_error and error_context."""

    def test_transforms_and_reraises(self):
        with pytest.raises(RasterizationError) as exc_info:
            handle_error(ValueError("boom"), "decode", RasterizationError)

        assert "Failed to decode: boom" in str(exc_info.value)
        assert exc_info.value.context["original_error_type"] == "ValueError"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_returns_when_not_reraising(self):
        error = handle_error(
            KeyError("k"), "look up", level=ErrorLevel.WARNING, reraise=False
        )
        assert isinstance(error, ExportError)

    def test_context_logged(self, caplog):
        logger = logging.getLogger("wavelab.test")
        with caplog.at_level(logging.ERROR):
            handle_error(
                ValueError("x"), "render", context={"width": 10}, logger=logger, reraise=False
            )
        assert "context: width=10" in caplog.text

    def test_error_context_wraps_foreign_errors(self):
        with pytest.raises(RasterizationError, match="Failed to parse"):
            with error_context("parse", RasterizationError):
                raise ValueError("bad token")

    def test_error_context_passes_wavelab_errors(self):
        with pytest.raises(ValidationError):
            with error_context("parse", RasterizationError):
                raise ValidationError("already typed")


@pytest.mark.fast
class TestArtifactIO:
    """Tests for atomic artifact writes."""

    def test_write_text_and_bytes(self, tmp_path):
        svg = write_artifact(tmp_path / "out" / "wave.svg", "<svg/>")
        png = write_artifact(tmp_path / "wave.png", b"\x89PNG")

        assert svg.read_text() == "<svg/>"
        assert png.read_bytes() == b"\x89PNG"

    def test_failed_write_leaves_nothing(self, tmp_path):
        target = tmp_path / "wave.svg"
        with pytest.raises(RuntimeError):
            with atomic_write(target) as f:
                f.write("partial")
                raise RuntimeError("interrupted")

        assert list(tmp_path.iterdir()) == []

    def test_overwrites_existing(self, tmp_path):
        target = tmp_path / "wave.svg"
        target.write_text("old")
        write_artifact(target, "new")
        assert target.read_text() == "new"

    def test_setup_logging_creates_log_dir(self, tmp_path):
        logger = setup_logging(tmp_path / "logs", "DEBUG")

        assert logger.name == "wavelab"
        assert (tmp_path / "logs").is_dir()
