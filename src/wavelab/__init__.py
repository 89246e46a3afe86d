"""WaveLab - procedural SVG wave generation, morphing and export."""

__version__: str = "0.1.0"
__author__: str = "WaveLab Team"
__email__: str = "team@wavelab.example"

# Public re-exports for convenience ---------------------------------------------------

from .color import (
    HslColor,
    RgbColor,
    contrast_ratio,
    hsl_to_rgb,
    nudge_lightness,
    parse_hex,
    rgb_to_hex,
    rgb_to_hsl,
)
from .export import CairoRasterizer, ImageFormat, build_svg_markup, render_raster
from .generator import WaveConfig, WaveGenerator
from .morph import ManualFrameScheduler, MorphAnimator, MorphEngine, MorphSession
from .paths import build_path
from .points import WaveParams, WavePoint, WavePosition, WaveShape, generate_points

__all__ = [
    "CairoRasterizer",
    "HslColor",
    "ImageFormat",
    "ManualFrameScheduler",
    "MorphAnimator",
    "MorphEngine",
    "MorphSession",
    "RgbColor",
    "WaveConfig",
    "WaveGenerator",
    "WaveParams",
    "WavePoint",
    "WavePosition",
    "WaveShape",
    "build_path",
    "build_svg_markup",
    "contrast_ratio",
    "generate_points",
    "hsl_to_rgb",
    "nudge_lightness",
    "parse_hex",
    "render_raster",
    "rgb_to_hex",
    "rgb_to_hsl",
]
