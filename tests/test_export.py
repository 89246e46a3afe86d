"""Tests for wavelab.export module."""

import io
from unittest.mock import MagicMock

import pytest
from PIL import Image

from wavelab.config import ExportConfig
from wavelab.error_handling import ExportError, RasterizationError
from wavelab.export import (
    CairoRasterizer,
    ImageFormat,
    Surface,
    build_svg_markup,
    clamp_output_size,
    get_rasterizer,
    render_raster,
    write_export,
)

# Bottom half of the canvas filled
HALF_PATH = "M 0 320 L 0 160 L 1440 160 L 1440 320 Z"
FILL_RGBA = (249, 115, 115, 255)


def _decode(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


@pytest.mark.fast
class TestImageFormat:
    def test_filenames(self):
        assert ImageFormat.SVG.filename == "wave.svg"
        assert ImageFormat.PNG.filename == "wave.png"
        assert ImageFormat("jpg").filename == "wave.jpg"

    def test_mime_types(self):
        assert ImageFormat.SVG.mime_type == "image/svg+xml;charset=utf-8"
        assert ImageFormat.JPG.mime_type == "image/jpeg"

    def test_is_raster(self):
        assert not ImageFormat.SVG.is_raster
        assert ImageFormat.PNG.is_raster


@pytest.mark.fast
class TestBuildSvgMarkup:
    """Tests for build_svg_markup function."""

    def test_exact_document(self):
        markup = build_svg_markup("M 0 0 Z", "#f97373", 1440, 320)
        assert markup == (
            '<svg xmlns="http://www.w3.org/2000/svg" width="1440" height="320" '
            'viewBox="0 0 1440 320" preserveAspectRatio="none">\n'
            '  <path fill="#f97373" d="M 0 0 Z" />\n'
            "</svg>"
        )

    def test_viewbox_independent_of_pixel_size(self):
        markup = build_svg_markup("M 0 0 Z", "#000", 2880, 640)

        assert 'width="2880" height="640"' in markup
        assert 'viewBox="0 0 1440 320"' in markup

    def test_transparent_fill_written_verbatim(self):
        assert 'fill="transparent"' in build_svg_markup("M 0 0 Z", "transparent", 1440, 320)

    def test_dimensions_clamped(self):
        markup = build_svg_markup("M 0 0 Z", "#000", 10, 99999)
        assert 'width="120" height="4096"' in markup

    def test_clamp_output_size(self):
        assert clamp_output_size(50, 50) == (120, 80)
        assert clamp_output_size(9000, 5000) == (8192, 4096)
        assert clamp_output_size(800, 600) == (800, 600)


@pytest.mark.fast
class TestSurface:
    """Tests for Surface compositing and encoding."""

    def test_transparent_background_keeps_alpha(self):
        surface = Surface(Image.new("RGBA", (4, 4), (0, 0, 0, 0)))
        surface.composite_background("transparent")
        assert surface.image.getpixel((0, 0))[3] == 0

    def test_solid_background(self):
        surface = Surface(Image.new("RGBA", (4, 4), (0, 0, 0, 0)))
        surface.composite_background("#102030")
        assert surface.image.getpixel((1, 1)) == (16, 32, 48, 255)

    def test_bad_background_color(self):
        surface = Surface(Image.new("RGBA", (4, 4)))
        with pytest.raises(RasterizationError, match="parse background color"):
            surface.composite_background("#nothex")

    def test_encode_svg_rejected(self):
        surface = Surface(Image.new("RGBA", (4, 4)))
        with pytest.raises(RasterizationError, match="not a raster format"):
            surface.encode(ImageFormat.SVG)
@pytest.mark.fast
class TestGetRasterizer:
    def test_default_backend_is_cairo(self):
        assert isinstance(get_rasterizer(), CairoRasterizer)

    def test_jpeg_quality_carried(self):
        assert get_rasterizer(ExportConfig(JPEG_QUALITY=40)).jpeg_quality == 40


class TestCairoRasterizer:
    """Tests for CairoRasterizer decode."""

    @pytest.fixture
    def rasterizer(self):
        return CairoRasterizer()

    def test_surface_has_requested_size(self, rasterizer):
        markup = build_svg_markup(HALF_PATH, "#f97373", 720, 160)
        assert rasterizer.decode(markup, 720, 160).size == (720, 160)

    def test_viewbox_stretched_on_each_axis(self, rasterizer):
        markup = build_svg_markup(HALF_PATH, "#f97373", 300, 200)
        image = rasterizer.decode(markup, 300, 200).image

        assert image.getpixel((150, 20))[3] == 0
        assert image.getpixel((150, 180)) == FILL_RGBA
        assert image.getpixel((290, 190)) == FILL_RGBA

    def test_relative_and_shorthand_commands(self, rasterizer):
        """Any valid path data renders, not only the commands the builder emits."""
        markup = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" '
            'viewBox="0 0 1440 320" preserveAspectRatio="none">'
            '<path fill="#f97373" d="M0 320 h1440 v-200 H0 z"/></svg>'
        )
        image = rasterizer.decode(markup, 200, 100).image

        assert image.getpixel((100, 90)) == FILL_RGBA
        assert image.getpixel((100, 10))[3] == 0

    def test_quadratic_curves(self, rasterizer):
        markup = build_svg_markup(
            "M 0 320 L 0 160 Q 720 0 1440 160 L 1440 320 Z", "#f97373", 300, 200
        )
        image = rasterizer.decode(markup, 300, 200).image

        assert image.getpixel((150, 150)) == FILL_RGBA
        assert image.getpixel((5, 20))[3] == 0

    def test_transparent_fill_draws_nothing(self, rasterizer):
        markup = build_svg_markup(HALF_PATH, "transparent", 200, 100)
        image = rasterizer.decode(markup, 200, 100).image

        assert image.getextrema()[3] == (0, 0)

    def test_invalid_size(self, rasterizer):
        with pytest.raises(RasterizationError, match="Invalid surface size"):
            rasterizer.decode(build_svg_markup(HALF_PATH, "#000", 200, 100), 0, 100)

    def test_malformed_markup(self, rasterizer):
        with pytest.raises(RasterizationError, match="render SVG with cairosvg"):
            rasterizer.decode("<svg", 200, 100)


class TestRenderRaster:
    """Tests for render_raster compositing rules."""

    def test_png_transparent_background(self):
        markup = build_svg_markup(HALF_PATH, "#f97373", 400, 100)
        image = _decode(render_raster(markup, 400, 100, "png", "transparent", CairoRasterizer()))

        assert image.format == "PNG"
        assert image.mode == "RGBA"
        assert image.getpixel((200, 10))[3] == 0
        assert image.getpixel((200, 90)) == FILL_RGBA

    def test_png_solid_background(self):
        markup = build_svg_markup(HALF_PATH, "#f97373", 400, 100)
        image = _decode(render_raster(markup, 400, 100, "png", "#000000", CairoRasterizer()))

        assert image.getpixel((200, 10)) == (0, 0, 0, 255)

    def test_jpg_transparent_background_becomes_white(self):
        markup = build_svg_markup(HALF_PATH, "#000000", 400, 100)
        image = _decode(render_raster(markup, 400, 100, ImageFormat.JPG, "transparent", CairoRasterizer()))

        assert image.format == "JPEG"
        assert image.size == (400, 100)
        assert all(channel > 240 for channel in image.getpixel((200, 10)))
        assert all(channel < 15 for channel in image.getpixel((200, 90)))

    def test_svg_is_not_raster(self):
        with pytest.raises(RasterizationError):
            render_raster("<svg/>", 10, 10, ImageFormat.SVG, "transparent", CairoRasterizer())

    def test_uses_injected_rasterizer(self):
        rasterizer = MagicMock()
        rasterizer.decode.return_value = Surface(Image.new("RGBA", (8, 8)))

        render_raster("<svg/>", 8, 8, "png", "transparent", rasterizer)

        rasterizer.decode.assert_called_once_with("<svg/>", 8, 8)


class TestWriteExport:
    """Tests for write_export function."""

    def test_svg_written_verbatim(self, tmp_path):
        markup = build_svg_markup(HALF_PATH, "#f97373", 1440, 320)
        target = write_export(tmp_path, "svg", markup, 1440, 320, "#ffffff")

        assert target == tmp_path / "wave.svg"
        assert target.read_text() == markup

    def test_png_written(self, tmp_path):
        markup = build_svg_markup(HALF_PATH, "#f97373", 240, 80)
        target = write_export(tmp_path, ImageFormat.PNG, markup, 240, 80, "transparent", CairoRasterizer())

        assert target.name == "wave.png"
        assert _decode(target.read_bytes()).size == (240, 80)

    def test_failed_raster_leaves_no_file(self, tmp_path):
        with pytest.raises(RasterizationError):
            write_export(tmp_path, "png", "not svg", 240, 80, "transparent", CairoRasterizer())

        assert list(tmp_path.iterdir()) == []

    def test_unwritable_target_raises_export_error(self, tmp_path):
        blocker = tmp_path / "exports"
        blocker.write_text("a file, not a directory")
        markup = build_svg_markup(HALF_PATH, "#f97373", 1440, 320)

        with pytest.raises(ExportError, match="write export"):
            write_export(blocker, "svg", markup, 1440, 320, "#ffffff")
