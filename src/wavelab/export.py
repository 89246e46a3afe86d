"""SVG serialization and raster export.

Vector export wraps the current path data into a single-path SVG document
with explicit pixel size and the logical 1440x320 viewBox. Raster export
decodes that document into a bitmap at the requested pixel size through an
injected Rasterizer, composites the background and encodes PNG or JPEG.

Compositing rules:
    JPEG: background color (white when "transparent") is always filled
    PNG: background filled unless it is "transparent", preserving alpha

The default rasterizer renders with ``cairosvg``; any object with a matching
``decode`` method can be injected instead.
"""

from __future__ import annotations

import io
import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

import cairosvg
from PIL import Image, ImageColor

from .config import (
    DEFAULT_CANVAS_CONFIG,
    DEFAULT_CONTROL_CONFIG,
    DEFAULT_EXPORT_CONFIG,
    CanvasConfig,
    ControlConfig,
    ExportConfig,
)
from .error_handling import ExportError, RasterizationError, error_context
from .io import write_artifact

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
TRANSPARENT = "transparent"


class ImageFormat(str, Enum):
    """Export formats with their download names and MIME types."""

    SVG = "svg"
    PNG = "png"
    JPG = "jpg"

    @property
    def filename(self) -> str:
        return f"wave.{self.value}"

    @property
    def mime_type(self) -> str:
        return {
            ImageFormat.SVG: "image/svg+xml;charset=utf-8",
            ImageFormat.PNG: "image/png",
            ImageFormat.JPG: "image/jpeg",
        }[self]

    @property
    def is_raster(self) -> bool:
        return self is not ImageFormat.SVG


def clamp_output_size(
    width: int, height: int, controls: ControlConfig = DEFAULT_CONTROL_CONFIG
) -> tuple[int, int]:
    """Clamp pixel dimensions to the supported export range."""
    clamped_width = min(controls.MAX_OUTPUT_WIDTH, max(controls.MIN_OUTPUT_WIDTH, int(width)))
    clamped_height = min(
        controls.MAX_OUTPUT_HEIGHT, max(controls.MIN_OUTPUT_HEIGHT, int(height))
    )
    return clamped_width, clamped_height


def build_svg_markup(
    path_data: str,
    fill: str,
    width: int,
    height: int,
    canvas: CanvasConfig = DEFAULT_CANVAS_CONFIG,
    controls: ControlConfig = DEFAULT_CONTROL_CONFIG,
) -> str:
    """Wrap path data into a standalone SVG document.

    Args:
        path_data: Path ``d`` attribute
        fill: Fill color as written by the user, hex or "transparent"
        width: Pixel width, clamped to the export range
        height: Pixel height, clamped to the export range
        canvas: Logical canvas used for the viewBox

    Returns:
        SVG document text
    """
    width, height = clamp_output_size(width, height, controls)
    return (
        f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}" '
        f'viewBox="0 0 {canvas.WIDTH} {canvas.HEIGHT}" preserveAspectRatio="none">\n'
        f'  <path fill="{fill}" d="{path_data}" />\n'
        f"</svg>"
    )


class Surface:
    """Offscreen RGBA bitmap holding a decoded vector image."""

    def __init__(self, image: Image.Image, jpeg_quality: int = DEFAULT_EXPORT_CONFIG.JPEG_QUALITY):
        self.image = image.convert("RGBA")
        self.jpeg_quality = jpeg_quality

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def composite_background(self, color: str | None) -> Surface:
        """Draw the current image over a solid background.

        Args:
            color: Any Pillow color, or None / "transparent" to keep alpha

        Raises:
            RasterizationError: If the color is not understood
        """
        if color is None or color == TRANSPARENT:
            return self

        with error_context("parse background color", RasterizationError, context={"color": color}):
            rgb = ImageColor.getrgb(color)

        background = Image.new("RGBA", self.image.size, rgb)
        self.image = Image.alpha_composite(background, self.image)
        return self

    def encode(self, image_format: ImageFormat | str) -> bytes:
        """Encode the surface as PNG or JPEG bytes."""
        image_format = ImageFormat(image_format)
        buffer = io.BytesIO()

        with error_context(f"encode {image_format.value.upper()}", RasterizationError):
            if image_format == ImageFormat.PNG:
                self.image.save(buffer, format="PNG")
            elif image_format == ImageFormat.JPG:
                # JPEG has no alpha channel
                self.image.convert("RGB").save(buffer, format="JPEG", quality=self.jpeg_quality)
            else:
                raise ValueError(f"{image_format.value} is not a raster format")

        return buffer.getvalue()


class Rasterizer(Protocol):
    def decode(self, markup: str, width: int, height: int) -> Surface:
        """Render SVG markup onto a transparent surface of exactly width x height."""
        ...


class CairoRasterizer:
    """Rasterize SVG markup through cairosvg.

    The requested size overrides the document's width and height; with
    ``preserveAspectRatio="none"`` the viewBox is stretched on each axis.
    """

    def __init__(self, config: ExportConfig = DEFAULT_EXPORT_CONFIG):
        self.jpeg_quality = config.JPEG_QUALITY

    def decode(self, markup: str, width: int, height: int) -> Surface:
        if width <= 0 or height <= 0:
            raise RasterizationError(f"Invalid surface size {width}x{height}")

        with error_context(
            "render SVG with cairosvg",
            RasterizationError,
            context={"width": width, "height": height},
        ):
            png_bytes = cairosvg.svg2png(
                bytestring=markup.encode("utf-8"),
                output_width=width,
                output_height=height,
            )
            image = Image.open(io.BytesIO(png_bytes))
            image.load()

        if image.size != (width, height):
            image = image.resize((width, height), Image.Resampling.LANCZOS)
        return Surface(image, self.jpeg_quality)


def get_rasterizer(config: ExportConfig = DEFAULT_EXPORT_CONFIG) -> Rasterizer:
    return CairoRasterizer(config)


def render_raster(
    markup: str,
    width: int,
    height: int,
    image_format: ImageFormat | str,
    background: str,
    rasterizer: Rasterizer | None = None,
) -> bytes:
    """Rasterize SVG markup to PNG or JPEG bytes at exactly ``width`` x ``height``.

    Args:
        markup: SVG document text
        width: Output pixel width
        height: Output pixel height
        image_format: ``png`` or ``jpg``
        background: Background hex color or "transparent"
        rasterizer: Backend, defaults to cairosvg

    Returns:
        Encoded image bytes

    Raises:
        RasterizationError: If decoding, compositing or encoding fails
    """
    image_format = ImageFormat(image_format)
    if not image_format.is_raster:
        raise RasterizationError(f"{image_format.value} is not a raster format")

    if rasterizer is None:
        rasterizer = get_rasterizer()

    surface = rasterizer.decode(markup, width, height)

    if image_format == ImageFormat.JPG:
        surface.composite_background("#ffffff" if background == TRANSPARENT else background)
    elif background != TRANSPARENT:
        surface.composite_background(background)

    return surface.encode(image_format)


def write_export(
    output_dir: Path,
    image_format: ImageFormat | str,
    markup: str,
    width: int,
    height: int,
    background: str,
    rasterizer: Rasterizer | None = None,
) -> Path:
    """Render and atomically write ``wave.svg`` / ``wave.png`` / ``wave.jpg``.

    Returns:
        Path of the written file

    Raises:
        RasterizationError: If rasterization fails; no file is written
        ExportError: If the file cannot be written
    """
    image_format = ImageFormat(image_format)
    target = output_dir / image_format.filename

    if image_format.is_raster:
        payload: str | bytes = render_raster(
            markup, width, height, image_format, background, rasterizer
        )
    else:
        payload = markup

    with error_context("write export", ExportError, context={"target": target}):
        write_artifact(target, payload)

    logger.info(f"Exported {target} ({width}x{height})")
    return target
