"""Interactive wave generator session.

Holds the user's raw control values, drives the morph engine when any value
that affects the silhouette changes, keeps a one-level "restore previous"
snapshot and performs the best-effort clipboard and download actions.

Parameter state (seed, height, restored snapshot fields) is committed only
when the morph that visualizes it finishes, so a change made mid-flight
always chains from what is on screen.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .color import nudge_lightness
from .config import (
    DEFAULT_CANVAS_CONFIG,
    DEFAULT_CONTROL_CONFIG,
    DEFAULT_MORPH_CONFIG,
    CanvasConfig,
    ControlConfig,
    MorphConfig,
)
from .error_handling import WaveLabError
from .export import TRANSPARENT, ImageFormat, Rasterizer, build_svg_markup, write_export
from .morph import FrameScheduler, MorphEngine, MorphSession
from .points import WaveParams, WavePosition, WaveShape

logger = logging.getLogger(__name__)

ClipboardWriter = Callable[[str], None]


@dataclass(frozen=True)
class WaveConfig:
    """Snapshot of every user-chosen input, used by "restore previous"."""

    seed: int
    position: WavePosition
    shape: WaveShape
    height_value: str
    intensity_value: str
    fill_color: str
    background_color: str
    output_width_value: str
    output_height_value: str


def _parse_float(value: str) -> float | None:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_int(value: str) -> int | None:
    # Leading integer digits only: "1440.7" -> 1440, "1e3" -> 1, "12px" -> 12
    match = _LEADING_INT.match(value) if isinstance(value, str) else None
    return int(match.group(1)) if match else None


def parse_height(value: str, controls: ControlConfig = DEFAULT_CONTROL_CONFIG) -> float:
    """Wave height from raw input: fallback when not numeric, else clamped."""
    parsed = _parse_float(value)
    if parsed is None:
        return controls.FALLBACK_HEIGHT
    return min(controls.MAX_HEIGHT, max(controls.MIN_HEIGHT, parsed))


def parse_intensity(value: str, controls: ControlConfig = DEFAULT_CONTROL_CONFIG) -> float:
    parsed = _parse_float(value)
    if parsed is None:
        return controls.FALLBACK_INTENSITY
    return min(1.0, max(0.0, parsed))


def parse_output_width(
    value: str,
    controls: ControlConfig = DEFAULT_CONTROL_CONFIG,
    canvas: CanvasConfig = DEFAULT_CANVAS_CONFIG,
) -> int:
    parsed = _parse_int(value)
    if parsed is None or parsed <= 0:
        return canvas.WIDTH
    return min(controls.MAX_OUTPUT_WIDTH, max(controls.MIN_OUTPUT_WIDTH, parsed))


def parse_output_height(
    value: str,
    controls: ControlConfig = DEFAULT_CONTROL_CONFIG,
    canvas: CanvasConfig = DEFAULT_CANVAS_CONFIG,
) -> int:
    parsed = _parse_int(value)
    if parsed is None or parsed <= 0:
        return canvas.HEIGHT
    return min(controls.MAX_OUTPUT_HEIGHT, max(controls.MIN_OUTPUT_HEIGHT, parsed))


def base_height_for(
    height: float, position: WavePosition, canvas: CanvasConfig = DEFAULT_CANVAS_CONFIG
) -> float:
    """Baseline y coordinate for a wave body ``height`` tall from its anchor edge."""
    if WavePosition(position) == WavePosition.BOTTOM:
        return canvas.HEIGHT - height
    return height


class WaveGenerator:
    """Stateful controller behind the wave generator tool.

    Args:
        scheduler: Frame clock for the morph engine
        canvas: Logical design canvas
        controls: Defaults and valid ranges of the inputs
        morph_config: Animation timing
        rasterizer: Raster backend for PNG/JPEG downloads
        clipboard: Callable writing text to the clipboard, if one is available
    """

    def __init__(
        self,
        scheduler: FrameScheduler | None = None,
        canvas: CanvasConfig = DEFAULT_CANVAS_CONFIG,
        controls: ControlConfig = DEFAULT_CONTROL_CONFIG,
        morph_config: MorphConfig = DEFAULT_MORPH_CONFIG,
        rasterizer: Rasterizer | None = None,
        clipboard: ClipboardWriter | None = None,
    ):
        self.canvas = canvas
        self.controls = controls
        self.rasterizer = rasterizer
        self.clipboard = clipboard
        self.engine = MorphEngine(scheduler, canvas, morph_config)

        self.seed = 1
        self.position = WavePosition.BOTTOM
        self.shape = WaveShape.SMOOTH
        self.height_value = _format_control(controls.DEFAULT_HEIGHT)
        self.intensity_value = _format_control(controls.DEFAULT_INTENSITY)
        self.fill_color = controls.DEFAULT_FILL_COLOR
        self.background_color = controls.DEFAULT_BACKGROUND_COLOR
        self.output_width_value = str(controls.DEFAULT_OUTPUT_WIDTH)
        self.output_height_value = str(controls.DEFAULT_OUTPUT_HEIGHT)

        # Last opaque colors, restored when transparency is switched off
        self.previous_fill_color = controls.DEFAULT_FILL_COLOR
        self.previous_background_color = controls.DEFAULT_BACKGROUND_COLOR

        self.previous_config: WaveConfig | None = None
        self.is_downloading = False

        self.engine.show(self.current_params())

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def numeric_height(self) -> float:
        return parse_height(self.height_value, self.controls)

    @property
    def numeric_intensity(self) -> float:
        return parse_intensity(self.intensity_value, self.controls)

    @property
    def output_width(self) -> int:
        return parse_output_width(self.output_width_value, self.controls, self.canvas)

    @property
    def output_height(self) -> int:
        return parse_output_height(self.output_height_value, self.controls, self.canvas)

    @property
    def base_height(self) -> float:
        return base_height_for(self.numeric_height, self.position, self.canvas)

    @property
    def current_path(self) -> str:
        return self.engine.current_path

    @property
    def is_morphing(self) -> bool:
        return self.engine.session is not None

    @property
    def fill_swatch_color(self) -> str:
        if self.fill_color == TRANSPARENT:
            return self.previous_fill_color or self.controls.DEFAULT_FILL_COLOR
        return self.fill_color or self.controls.DEFAULT_FILL_COLOR

    @property
    def background_swatch_color(self) -> str:
        if self.background_color == TRANSPARENT:
            return self.previous_background_color or self.controls.DEFAULT_BACKGROUND_COLOR
        return self.background_color or self.controls.DEFAULT_BACKGROUND_COLOR

    @property
    def svg_markup(self) -> str:
        return build_svg_markup(
            self.current_path,
            self.fill_color,
            self.output_width,
            self.output_height,
            self.canvas,
            self.controls,
        )

    def current_params(self, **changes) -> WaveParams:
        params = WaveParams(
            width=self.canvas.WIDTH,
            height=self.canvas.HEIGHT,
            intensity=self.numeric_intensity,
            base_height=self.base_height,
            seed=self.seed,
            position=self.position,
            shape=self.shape,
        )
        return params.evolve(**changes) if changes else params

    def snapshot(self) -> WaveConfig:
        return WaveConfig(
            seed=self.seed,
            position=self.position,
            shape=self.shape,
            height_value=self.height_value,
            intensity_value=self.intensity_value,
            fill_color=self.fill_color,
            background_color=self.background_color,
            output_width_value=self.output_width_value,
            output_height_value=self.output_height_value,
        )

    # ------------------------------------------------------------------
    # Silhouette-changing actions
    # ------------------------------------------------------------------

    def apply(self, config: WaveConfig) -> str:
        """Load every input from ``config`` and render it without animating."""
        self.seed = config.seed
        self.position = WavePosition(config.position)
        self.shape = WaveShape(config.shape)
        self.height_value = config.height_value
        self.intensity_value = config.intensity_value
        self.set_fill_color(config.fill_color)
        self.set_background_color(config.background_color)
        self.output_width_value = config.output_width_value
        self.output_height_value = config.output_height_value
        return self.engine.show(self.current_params())

    def save_snapshot(self) -> WaveConfig:
        """Capture the current inputs as the "restore previous" target."""
        self.previous_config = self.snapshot()
        return self.previous_config

    def randomize(self) -> MorphSession:
        """Morph to the next seed; the seed is committed when the morph ends."""
        self.save_snapshot()
        next_seed = self.seed + 1

        def commit() -> None:
            self.seed = next_seed

        return self.engine.morph(
            self.current_params(), self.current_params(seed=next_seed), commit
        )

    def set_height(self, value: str) -> MorphSession:
        next_height = parse_height(value, self.controls)
        to_params = self.current_params(
            base_height=base_height_for(next_height, self.position, self.canvas)
        )
        from_params = self.current_params()
        self.height_value = value
        return self.engine.morph(from_params, to_params)

    def set_intensity(self, value: str) -> MorphSession:
        from_params = self.current_params()
        to_params = self.current_params(intensity=parse_intensity(value, self.controls))
        self.intensity_value = value
        return self.engine.morph(from_params, to_params)

    def set_position(self, position: WavePosition | str) -> MorphSession | None:
        position = WavePosition(position)
        if position == self.position:
            return None

        from_params = self.current_params()
        to_params = self.current_params(
            position=position,
            base_height=base_height_for(self.numeric_height, position, self.canvas),
        )
        self.position = position
        return self.engine.morph(from_params, to_params)

    def set_shape(self, shape: WaveShape | str) -> MorphSession | None:
        shape = WaveShape(shape)
        if shape == self.shape:
            return None

        from_params = self.current_params()
        to_params = self.current_params(shape=shape)
        self.shape = shape
        return self.engine.morph(from_params, to_params)

    def restore_previous(self) -> MorphSession | None:
        """Morph back to the saved snapshot, then commit all of its fields."""
        previous = self.previous_config
        if previous is None:
            return None

        height = parse_height(previous.height_value, self.controls)
        to_params = WaveParams(
            width=self.canvas.WIDTH,
            height=self.canvas.HEIGHT,
            intensity=parse_intensity(previous.intensity_value, self.controls),
            base_height=base_height_for(height, previous.position, self.canvas),
            seed=previous.seed,
            position=previous.position,
            shape=previous.shape,
        )

        def commit() -> None:
            self.seed = previous.seed
            self.position = previous.position
            self.shape = previous.shape
            self.height_value = previous.height_value
            self.intensity_value = previous.intensity_value
            self.fill_color = previous.fill_color
            self.background_color = previous.background_color
            self.output_width_value = previous.output_width_value
            self.output_height_value = previous.output_height_value
            self.previous_config = None

        return self.engine.morph(self.current_params(), to_params, commit)

    # ------------------------------------------------------------------
    # Output size and colors
    # ------------------------------------------------------------------

    def _nudge_step(self, shift: bool) -> int:
        return self.controls.NUDGE_AMOUNT if shift else 1

    def nudge_output_width(self, up: bool, shift: bool = False) -> int:
        """Step the output width; steps leaving the valid range are ignored."""
        step = self._nudge_step(shift)
        candidate = self.output_width + (step if up else -step)
        if self.controls.MIN_OUTPUT_WIDTH <= candidate <= self.controls.MAX_OUTPUT_WIDTH:
            self.output_width_value = str(candidate)
        return self.output_width

    def nudge_output_height(self, up: bool, shift: bool = False) -> int:
        step = self._nudge_step(shift)
        candidate = self.output_height + (step if up else -step)
        if self.controls.MIN_OUTPUT_HEIGHT <= candidate <= self.controls.MAX_OUTPUT_HEIGHT:
            self.output_height_value = str(candidate)
        return self.output_height

    def set_fill_color(self, color: str) -> None:
        self.fill_color = color
        if color != TRANSPARENT:
            self.previous_fill_color = color

    def set_background_color(self, color: str) -> None:
        self.background_color = color
        if color != TRANSPARENT:
            self.previous_background_color = color

    def set_fill_transparent(self, transparent: bool) -> None:
        if transparent:
            if self.fill_color != TRANSPARENT:
                self.previous_fill_color = self.fill_color
            self.fill_color = TRANSPARENT
        else:
            self.fill_color = self.previous_fill_color or self.controls.DEFAULT_FILL_COLOR

    def set_background_transparent(self, transparent: bool) -> None:
        if transparent:
            if self.background_color != TRANSPARENT:
                self.previous_background_color = self.background_color
            self.background_color = TRANSPARENT
        else:
            self.background_color = (
                self.previous_background_color or self.controls.DEFAULT_BACKGROUND_COLOR
            )

    def nudge_fill_lightness(self, delta_percent: float) -> str:
        """Step the fill lightness (arrow keys); a transparent fill is left alone."""
        if self.fill_color != TRANSPARENT:
            self.set_fill_color(
                nudge_lightness(self.fill_color, self.controls.DEFAULT_FILL_COLOR, delta_percent)
            )
        return self.fill_color

    def nudge_background_lightness(self, delta_percent: float) -> str:
        if self.background_color != TRANSPARENT:
            self.set_background_color(
                nudge_lightness(
                    self.background_color,
                    self.controls.DEFAULT_BACKGROUND_COLOR,
                    delta_percent,
                )
            )
        return self.background_color

    # ------------------------------------------------------------------
    # Best-effort outputs
    # ------------------------------------------------------------------

    def copy_markup(self) -> bool:
        """Write the SVG markup to the clipboard.

        Returns:
            True on success; False when no clipboard is available or it fails
        """
        if self.clipboard is None:
            return False
        try:
            self.clipboard(self.svg_markup)
        except Exception as e:
            logger.warning(f"Clipboard write failed: {e}")
            return False
        return True

    def download(self, image_format: ImageFormat | str, output_dir: Path | None) -> Path | None:
        """Export the current wave as ``wave.svg`` / ``wave.png`` / ``wave.jpg``.

        Args:
            image_format: Export format
            output_dir: Download directory; None means no download target

        Returns:
            The written path, or None when the export failed or had no target
        """
        if output_dir is None:
            return None

        try:
            image_format = ImageFormat(image_format)
        except ValueError:
            logger.warning(f"Unsupported download format: {image_format}")
            return None

        self.is_downloading = True
        try:
            return write_export(
                Path(output_dir),
                image_format,
                self.svg_markup,
                self.output_width,
                self.output_height,
                self.background_color,
                self.rasterizer,
            )
        except WaveLabError as e:
            logger.warning(f"Download of {image_format.filename} failed: {e}")
            return None
        finally:
            self.is_downloading = False


def _format_control(value: float) -> str:
    """Text shown in a numeric field for a default value (220.0 -> "220")."""
    return str(int(value)) if float(value).is_integer() else str(value)
