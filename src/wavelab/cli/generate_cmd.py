"""Generate a wave and export it as SVG, PNG or JPEG."""

import sys
from pathlib import Path

import click

from ..config import DEFAULT_CONTROL_CONFIG, DEFAULT_PATH_CONFIG
from ..export import ImageFormat, get_rasterizer
from ..generator import WaveConfig, WaveGenerator
from ..points import WavePosition, WaveShape
from .utils import (
    display_common_header,
    display_path_info,
    handle_generic_error,
    handle_keyboard_interrupt,
)


@click.command()
@click.option("--seed", type=int, default=1, help="Seed of the wave silhouette (default: 1)")
@click.option(
    "--shape",
    type=click.Choice(["smooth", "peaks"]),
    default="smooth",
    help="Smooth curve or angular peaks (default: smooth)",
)
@click.option(
    "--position",
    type=click.Choice(["top", "bottom"]),
    default="bottom",
    help="Edge the wave is anchored to (default: bottom)",
)
@click.option(
    "--height",
    "wave_height",
    default=str(int(DEFAULT_CONTROL_CONFIG.DEFAULT_HEIGHT)),
    help="Wave body height, clamped to 80-320 (default: 220)",
)
@click.option(
    "--intensity",
    default=str(DEFAULT_CONTROL_CONFIG.DEFAULT_INTENSITY),
    help="Amplitude between 0 and 1 (default: 0.6)",
)
@click.option(
    "--fill",
    default=DEFAULT_CONTROL_CONFIG.DEFAULT_FILL_COLOR,
    help="Fill color as hex or 'transparent'",
)
@click.option(
    "--background",
    default=DEFAULT_CONTROL_CONFIG.DEFAULT_BACKGROUND_COLOR,
    help="Background color for raster output as hex or 'transparent'",
)
@click.option("--width", "output_width", default="1440", help="Output width in pixels (120-8192)")
@click.option(
    "--output-height", "output_height", default="320", help="Output height in pixels (80-4096)"
)
@click.option(
    "--format",
    "image_format",
    type=click.Choice([f.value for f in ImageFormat]),
    default="svg",
    help="Export format (default: svg)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_PATH_CONFIG.OUTPUT_DIR,
    help="Directory receiving wave.svg / wave.png / wave.jpg (default: exports)",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print SVG markup instead of writing a file")
def generate(
    seed: int,
    shape: str,
    position: str,
    wave_height: str,
    intensity: str,
    fill: str,
    background: str,
    output_width: str,
    output_height: str,
    image_format: str,
    output_dir: Path,
    to_stdout: bool,
) -> None:
    """Generate a decorative SVG wave and export it."""
    try:
        generator = WaveGenerator(rasterizer=get_rasterizer())
        generator.apply(
            WaveConfig(
                seed=seed,
                position=WavePosition(position),
                shape=WaveShape(shape),
                height_value=wave_height,
                intensity_value=intensity,
                fill_color=fill,
                background_color=background,
                output_width_value=output_width,
                output_height_value=output_height,
            )
        )

        if to_stdout:
            click.echo(generator.svg_markup)
            return

        display_common_header("WaveLab wave export")
        click.echo(
            f"🎲 Seed {generator.seed}, {generator.shape.value} wave anchored "
            f"{generator.position.value}, {generator.output_width}x{generator.output_height}px"
        )

        target = generator.download(image_format, output_dir)
        if target is None:
            click.echo(f"❌ Export of {ImageFormat(image_format).filename} failed", err=True)
            sys.exit(1)

        display_path_info("Saved", target, "💾")

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Generate")
    except Exception as e:
        handle_generic_error("Generate", e)
