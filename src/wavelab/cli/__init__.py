"""CLI module for WaveLab commands.

Each command lives in its own module; this package assembles them into the
``wavelab`` command group.
"""

from pathlib import Path

import click

from .. import __version__
from ..config import DEFAULT_PATH_CONFIG
from ..io import setup_console_logging, setup_logging
from .contrast_cmd import contrast, suggest
from .generate_cmd import generate
from .morph_cmd import morph


@click.group()
@click.version_option(version=__version__, prog_name="wavelab")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging verbosity (default: WARNING)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    is_flag=False,
    flag_value=DEFAULT_PATH_CONFIG.LOGS_DIR,
    default=None,
    help="Also write a timestamped log file here (bare flag: logs)",
)
def main(log_level: str, log_dir: Path | None) -> None:
    """🌊 WaveLab: decorative SVG wave generator and color toolkit."""
    if log_dir is not None:
        setup_logging(log_dir, log_level)
    else:
        setup_console_logging(log_level)


main.add_command(generate)
main.add_command(morph)
main.add_command(contrast)
main.add_command(suggest)

__all__ = [
    "contrast",
    "generate",
    "main",
    "morph",
    "suggest",
]
