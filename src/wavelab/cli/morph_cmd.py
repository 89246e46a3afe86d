"""Render a morph between two waves to an animated GIF, frame by frame."""

import math
from pathlib import Path

import click
from tqdm import tqdm

from ..config import DEFAULT_CANVAS_CONFIG, DEFAULT_CONTROL_CONFIG, DEFAULT_MORPH_CONFIG
from ..export import TRANSPARENT, build_svg_markup, clamp_output_size, get_rasterizer
from ..generator import base_height_for, parse_height, parse_intensity
from ..morph import ManualFrameScheduler, MorphEngine, MorphState
from ..points import WaveParams, WavePosition, WaveShape
from .utils import (
    display_common_header,
    display_path_info,
    handle_generic_error,
    handle_keyboard_interrupt,
)


def _params(seed: int, shape: str, position: str, height: str, intensity: str) -> WaveParams:
    wave_height = parse_height(height)
    wave_position = WavePosition(position)
    return WaveParams(
        width=DEFAULT_CANVAS_CONFIG.WIDTH,
        height=DEFAULT_CANVAS_CONFIG.HEIGHT,
        intensity=parse_intensity(intensity),
        base_height=base_height_for(wave_height, wave_position),
        seed=seed,
        position=wave_position,
        shape=WaveShape(shape),
    )


@click.command()
@click.option("--from-seed", type=int, default=1, help="Seed of the first wave (default: 1)")
@click.option("--to-seed", type=int, default=2, help="Seed of the second wave (default: 2)")
@click.option("--from-shape", type=click.Choice(["smooth", "peaks"]), default="smooth")
@click.option("--to-shape", type=click.Choice(["smooth", "peaks"]), default=None)
@click.option("--position", type=click.Choice(["top", "bottom"]), default="bottom")
@click.option("--to-position", type=click.Choice(["top", "bottom"]), default=None)
@click.option("--height", "wave_height", default="220", help="Wave body height (80-320)")
@click.option("--intensity", default="0.6", help="Amplitude between 0 and 1")
@click.option("--fill", default=DEFAULT_CONTROL_CONFIG.DEFAULT_FILL_COLOR)
@click.option(
    "--background",
    default=DEFAULT_CONTROL_CONFIG.DEFAULT_BACKGROUND_COLOR,
    help="Frame background; 'transparent' renders on white",
)
@click.option("--width", "output_width", type=int, default=720, help="GIF width in pixels")
@click.option("--output-height", "output_height", type=int, default=160, help="GIF height in pixels")
@click.option(
    "--fps",
    type=click.IntRange(1, 120),
    default=DEFAULT_MORPH_CONFIG.FRAME_RATE,
    help="Frames per second (default: 60)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("exports/wave_morph.gif"),
    help="Output GIF path (default: exports/wave_morph.gif)",
)
def morph(
    from_seed: int,
    to_seed: int,
    from_shape: str,
    to_shape: str | None,
    position: str,
    to_position: str | None,
    wave_height: str,
    intensity: str,
    fill: str,
    background: str,
    output_width: int,
    output_height: int,
    fps: int,
    output: Path,
) -> None:
    """Render the animated transition between two waves to a GIF.

    Runs the same frame loop as the interactive generator on a headless
    clock, so every frame matches what the preview would show.
    """
    try:
        from_params = _params(from_seed, from_shape, position, wave_height, intensity)
        to_params = _params(
            to_seed, to_shape or from_shape, to_position or position, wave_height, intensity
        )

        output_width, output_height = clamp_output_size(output_width, output_height)
        display_common_header("WaveLab morph renderer")

        scheduler = ManualFrameScheduler()
        engine = MorphEngine(scheduler)
        engine.show(from_params)
        engine.morph(from_params, to_params)

        rasterizer = get_rasterizer()
        frame_background = "#ffffff" if background == TRANSPARENT else background
        frame_interval = 1000.0 / fps
        expected_frames = math.ceil(engine.duration_ms / frame_interval) + 1

        def render_frame():
            markup = build_svg_markup(engine.current_path, fill, output_width, output_height)
            surface = rasterizer.decode(markup, output_width, output_height)
            surface.composite_background(frame_background)
            return surface.image.convert("RGB")

        images = []
        with tqdm(total=expected_frames, desc="🌊 Rendering frames", unit="frame") as progress:
            images.append(render_frame())
            progress.update(1)
            while engine.state == MorphState.MORPHING:
                scheduler.advance(frame_interval)
                images.append(render_frame())
                progress.update(1)

        output.parent.mkdir(parents=True, exist_ok=True)
        images[0].save(
            output,
            save_all=True,
            append_images=images[1:],
            duration=int(round(frame_interval)),
            loop=0,
        )

        click.echo(f"🎞️  {len(images)} frames at {fps} fps")
        display_path_info("Saved", output, "💾")

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Morph")
    except Exception as e:
        handle_generic_error("Morph", e)
