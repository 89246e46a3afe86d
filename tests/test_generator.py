"""Tests for the interactive WaveGenerator session."""

from unittest.mock import MagicMock

import pytest

from wavelab.error_handling import RasterizationError
from wavelab.export import build_svg_markup
from wavelab.generator import (
    WaveConfig,
    WaveGenerator,
    base_height_for,
    parse_height,
    parse_intensity,
    parse_output_height,
    parse_output_width,
)
from wavelab.paths import build_path
from wavelab.points import WavePosition, WaveShape, generate_points


@pytest.mark.fast
class TestInputParsing:
    """Tests for lenient parsing of raw control values."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("220", 220), ("80", 80), ("10", 80), ("999", 320), ("150.5", 150.5), ("", 120), ("abc", 120)],
    )
    def test_parse_height(self, raw, expected):
        assert parse_height(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected", [("0.6", 0.6), ("2", 1.0), ("-1", 0.0), ("", 0.2), ("nan", 0.2)]
    )
    def test_parse_intensity(self, raw, expected):
        assert parse_intensity(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1440", 1440),
            ("50", 120),
            ("99999", 8192),
            ("0", 1440),
            ("-5", 1440),
            ("x", 1440),
            ("800.9", 800),
            (" 2000 ", 2000),
            ("+900", 900),
            ("2000px", 2000),
            ("1e4", 120),
        ],
    )
    def test_parse_output_width(self, raw, expected):
        assert parse_output_width(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [("320", 320), ("10", 80), ("5000", 4096), ("", 320), ("0", 320), ("1e3", 80), ("640.5", 640)],
    )
    def test_parse_output_height(self, raw, expected):
        assert parse_output_height(raw) == expected

    def test_base_height_for(self):
        assert base_height_for(220, WavePosition.BOTTOM) == 100
        assert base_height_for(220, "top") == 220


@pytest.mark.fast
class TestInitialState:
    """Tests for the generator's opening state."""

    def test_defaults(self, generator):
        assert generator.seed == 1
        assert generator.position == WavePosition.BOTTOM
        assert generator.shape == WaveShape.SMOOTH
        assert generator.height_value == "220"
        assert generator.intensity_value == "0.6"
        assert generator.fill_color == "#f97373"
        assert generator.background_color == "#ffffff"
        assert (generator.output_width, generator.output_height) == (1440, 320)
        assert generator.previous_config is None
        assert not generator.is_downloading

    def test_initial_path_rendered(self, generator, default_params):
        expected = build_path(generate_points(default_params), 1440, 320, "bottom", "smooth")
        assert generator.current_path == expected
        assert not generator.is_morphing

    def test_svg_markup_uses_current_state(self, generator):
        generator.set_fill_color("#123456")
        generator.output_width_value = "720"

        assert generator.svg_markup == build_svg_markup(generator.current_path, "#123456", 720, 320)


class TestSilhouetteActions:
    """Tests for actions that morph the displayed wave."""

    def test_randomize_commits_seed_after_morph(self, generator, settle):
        generator.randomize()

        assert generator.is_morphing
        assert generator.seed == 1
        assert generator.previous_config.seed == 1

        settle()

        assert generator.seed == 2
        assert generator.engine.current_points == generate_points(generator.current_params())

    def test_height_change_morphs_to_new_baseline(self, generator, settle):
        generator.set_height("300")

        assert generator.height_value == "300"
        settle()
        assert generator.base_height == 20
        assert generator.engine.current_points == generate_points(generator.current_params())

    def test_intensity_change(self, generator, settle):
        generator.set_intensity("1")
        settle()

        assert generator.numeric_intensity == 1.0
        assert generator.engine.current_points == generate_points(generator.current_params())

    def test_position_change(self, generator, settle):
        session = generator.set_position("top")

        assert session is not None
        assert generator.position == WavePosition.TOP
        settle()
        assert generator.current_path.startswith("M 0 0 ")
        assert generator.base_height == 220

    def test_unchanged_position_is_noop(self, generator):
        assert generator.set_position(WavePosition.BOTTOM) is None
        assert not generator.is_morphing

    def test_shape_change(self, generator, settle):
        assert generator.set_shape("peaks") is not None
        settle()

        assert "Q" not in generator.current_path
        assert len(generator.engine.current_points) == 9

    def test_unchanged_shape_is_noop(self, generator):
        assert generator.set_shape(WaveShape.SMOOTH) is None

    def test_mid_flight_change_chains(self, generator, scheduler, settle):
        generator.set_height("300")
        scheduler.advance(200)
        displayed = list(generator.engine.current_points)

        session = generator.set_intensity("0.1")

        assert session.from_points == displayed
        settle()
        assert generator.engine.current_points == generate_points(generator.current_params())

    def test_apply_renders_without_animation(self, generator):
        config = WaveConfig(
            seed=9,
            position=WavePosition.TOP,
            shape=WaveShape.PEAKS,
            height_value="150",
            intensity_value="0.3",
            fill_color="#000000",
            background_color="transparent",
            output_width_value="800",
            output_height_value="200",
        )
        generator.apply(config)

        assert not generator.is_morphing
        assert generator.snapshot() == config
        assert generator.current_path == build_path(
            generate_points(generator.current_params()), 1440, 320, "top", "peaks"
        )


class TestRestorePrevious:
    """Tests for the one-level restore snapshot."""

    def test_no_snapshot(self, generator):
        assert generator.restore_previous() is None

    def test_restores_all_fields_after_morph(self, generator, settle):
        original = generator.snapshot()
        original_path = generator.current_path

        generator.randomize()
        settle()
        generator.set_fill_color("#000000")
        generator.output_width_value = "900"

        generator.restore_previous()
        assert generator.seed == 2
        settle()

        assert generator.snapshot() == original
        assert generator.previous_config is None
        assert generator.current_path == original_path

    def test_save_snapshot(self, generator):
        generator.set_intensity("0.9")
        saved = generator.save_snapshot()

        assert saved.intensity_value == "0.9"
        assert generator.previous_config == saved


@pytest.mark.fast
class TestOutputSizeNudges:
    """Tests for arrow-key output size nudging."""

    def test_single_step(self, generator):
        assert generator.nudge_output_width(up=True) == 1441
        assert generator.nudge_output_height(up=False) == 319

    def test_shift_uses_nudge_amount(self, generator):
        assert generator.nudge_output_width(up=False, shift=True) == 1432

    def test_step_out_of_range_ignored(self, generator):
        generator.output_width_value = "8192"
        generator.output_height_value = "80"

        assert generator.nudge_output_width(up=True) == 8192
        assert generator.nudge_output_height(up=False, shift=True) == 80
        assert generator.output_height_value == "80"


@pytest.mark.fast
class TestColors:
    """Tests for fill/background color handling."""

    def test_transparent_fill_round_trip(self, generator):
        generator.set_fill_color("#00ff00")
        generator.set_fill_transparent(True)

        assert generator.fill_color == "transparent"
        assert generator.fill_swatch_color == "#00ff00"

        generator.set_fill_transparent(False)
        assert generator.fill_color == "#00ff00"

    def test_transparent_background_round_trip(self, generator):
        generator.set_background_transparent(True)
        assert generator.background_swatch_color == "#ffffff"

        generator.set_background_transparent(False)
        assert generator.background_color == "#ffffff"

    def test_nudge_fill_lightness(self, generator):
        generator.set_fill_color("#808080")
        assert generator.nudge_fill_lightness(10) == "#999999"
        assert generator.previous_fill_color == "#999999"

    def test_nudge_transparent_fill_is_noop(self, generator):
        generator.set_fill_transparent(True)
        assert generator.nudge_fill_lightness(10) == "transparent"

    def test_nudge_background_lightness_clamps(self, generator):
        assert generator.nudge_background_lightness(5) == "#ffffff"
        assert generator.nudge_background_lightness(-100) == "#000000"

    def test_empty_fill_swatch_falls_back(self, generator):
        generator.fill_color = ""
        assert generator.fill_swatch_color == "#f97373"


@pytest.mark.fast
class TestClipboard:
    """Tests for copy_markup."""

    def test_no_clipboard(self, generator):
        assert generator.copy_markup() is False

    def test_copies_markup(self, scheduler):
        clipboard = MagicMock()
        generator = WaveGenerator(scheduler=scheduler, clipboard=clipboard)

        assert generator.copy_markup() is True
        clipboard.assert_called_once_with(generator.svg_markup)

    def test_failure_is_quiet(self, scheduler, caplog):
        clipboard = MagicMock(side_effect=RuntimeError("denied"))
        generator = WaveGenerator(scheduler=scheduler, clipboard=clipboard)

        assert generator.copy_markup() is False
        assert "Clipboard write failed" in caplog.text


class TestDownload:
    """Tests for best-effort downloads."""

    def test_no_target(self, generator):
        assert generator.download("svg", None) is None

    def test_svg_download(self, generator, tmp_path):
        target = generator.download("svg", tmp_path)

        assert target == tmp_path / "wave.svg"
        assert target.read_text() == generator.svg_markup
        assert not generator.is_downloading

    def test_png_download(self, generator, tmp_path):
        generator.output_width_value = "360"
        generator.output_height_value = "80"

        target = generator.download("png", tmp_path)
        assert target.name == "wave.png"

    def test_raster_failure_returns_none(self, scheduler, tmp_path, caplog):
        rasterizer = MagicMock()
        rasterizer.decode.side_effect = RasterizationError("decode failed")
        generator = WaveGenerator(scheduler=scheduler, rasterizer=rasterizer)

        assert generator.download("jpg", tmp_path) is None
        assert not generator.is_downloading
        assert "Download of wave.jpg failed" in caplog.text
        assert not (tmp_path / "wave.jpg").exists()

    def test_downloading_flag_set_during_export(self, scheduler, tmp_path):
        seen = []
        generator = WaveGenerator(scheduler=scheduler)

        def decode(markup, width, height):
            seen.append(generator.is_downloading)
            raise RasterizationError("stop")

        generator.rasterizer = MagicMock()
        generator.rasterizer.decode.side_effect = decode

        generator.download("png", tmp_path)
        assert seen == [True]

    def test_unsupported_format_returns_none(self, generator, tmp_path, caplog):
        assert generator.download("gif", tmp_path) is None
        assert not generator.is_downloading
        assert "Unsupported download format: gif" in caplog.text
        assert list(tmp_path.iterdir()) == []

    def test_write_failure_returns_none(self, generator, tmp_path, caplog):
        blocker = tmp_path / "exports"
        blocker.write_text("a file, not a directory")

        assert generator.download("svg", blocker) is None
        assert not generator.is_downloading
        assert "Download of wave.svg failed" in caplog.text
