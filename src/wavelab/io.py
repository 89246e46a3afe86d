"""I/O utilities for atomic artifact writes and logging setup."""

import logging
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from shutil import move

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: Path, log_level: str = "INFO") -> logging.Logger:
    """Set up logging configuration for WaveLab.

    Args:
        log_dir: Directory to store log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"wavelab_{timestamp}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(log_file), logging.StreamHandler()],
    )

    return logging.getLogger("wavelab")


def setup_console_logging(log_level: str = "WARNING") -> logging.Logger:
    """Configure stream-only logging, used by the command line."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)
    return logging.getLogger("wavelab")


@contextmanager
def atomic_write(target_path: Path, mode: str = "w"):
    """Context manager for atomic file writes using temporary files.

    Args:
        target_path: Final path where file should be written
        mode: File open mode

    Yields:
        File handle for writing

    Example:
        with atomic_write(Path("wave.png"), "wb") as f:
            f.write(png_bytes)
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode=mode,
        dir=target_path.parent,
        delete=False,
        suffix=f".tmp_{target_path.name}",
    ) as temp_file:
        try:
            yield temp_file
            temp_file.flush()
            move(temp_file.name, target_path)
        except Exception:
            # No partial artifact survives a failed write
            Path(temp_file.name).unlink(missing_ok=True)
            raise


def write_artifact(target_path: Path, payload: str | bytes) -> Path:
    """Atomically write text or bytes to ``target_path``.

    Args:
        target_path: Destination file
        payload: SVG text or encoded raster bytes

    Returns:
        The written path
    """
    if isinstance(payload, str):
        with atomic_write(target_path, "w") as f:
            f.write(payload)
    else:
        with atomic_write(target_path, "wb") as f:
            f.write(payload)
    return target_path
