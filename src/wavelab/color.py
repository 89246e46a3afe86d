"""Color model utilities shared by the wave generator and the contrast checker.

Conversions between hex strings, 8-bit RGB and HSL, lightness adjustment, and
the WCAG 2 relative-luminance contrast ratio.

Invalid color input never raises: parsing returns ``None`` and every dependent
computation propagates ``None`` so callers can show an "enter valid colors"
state instead.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")
_NON_HEX = re.compile(r"[^0-9a-f]")


class RgbColor(NamedTuple):
    """8-bit sRGB color."""

    r: int
    g: int
    b: int


class HslColor(NamedTuple):
    """HSL color with every component in [0, 1]."""

    h: float
    s: float
    l: float  # noqa: E741


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_hex(text: str | None) -> RgbColor | None:
    """Parse a 3- or 6-digit hex color, with or without a leading ``#``.

    Args:
        text: Color text such as ``"#F97373"``, ``"fff"`` or ``" #abc "``

    Returns:
        The parsed color, or None for any other length or a non-hex character
    """
    if text is None:
        return None

    hex_text = text.strip()
    if hex_text.startswith("#"):
        hex_text = hex_text[1:]

    if len(hex_text) not in (3, 6) or not _HEX_DIGITS.match(hex_text):
        return None

    if len(hex_text) == 3:
        hex_text = "".join(char * 2 for char in hex_text)

    value = int(hex_text, 16)
    return RgbColor((value >> 16) & 255, (value >> 8) & 255, value & 255)


def rgb_to_hex(color: RgbColor) -> str:
    """Encode an RGB color as lowercase ``#rrggbb``."""
    return "#" + "".join(f"{int(channel):02x}" for channel in color)


def rgb_to_hsl(color: RgbColor) -> HslColor:
    r = color.r / 255
    g = color.g / 255
    b = color.b / 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)

    h = 0.0
    s = 0.0
    lightness = (max_c + min_c) / 2

    if max_c != min_c:
        d = max_c - min_c
        s = d / (2 - max_c - min_c) if lightness > 0.5 else d / (max_c + min_c)

        if max_c == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif max_c == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4

        h /= 6

    return HslColor(h, s, lightness)


def hsl_to_rgb(color: HslColor) -> RgbColor:
    h, s, lightness = color

    if s == 0:
        value = _round_half_up(lightness * 255)
        return RgbColor(value, value, value)

    q = lightness * (1 + s) if lightness < 0.5 else lightness + s - lightness * s
    p = 2 * lightness - q

    def hue_to_rgb(t: float) -> float:
        if t < 0:
            t += 1
        if t > 1:
            t -= 1
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    return RgbColor(
        _round_half_up(hue_to_rgb(h + 1 / 3) * 255),
        _round_half_up(hue_to_rgb(h) * 255),
        _round_half_up(hue_to_rgb(h - 1 / 3) * 255),
    )


def get_hex_lightness(value: str, fallback: str) -> int:
    """Return the HSL lightness of ``value`` as a rounded percentage.

    Falls back to ``fallback`` when ``value`` does not parse, and to 50 when
    neither does.
    """
    rgb = parse_hex(value) or parse_hex(fallback)
    if rgb is None:
        return 50
    return _round_half_up(rgb_to_hsl(rgb).l * 100)


def set_hex_lightness(value: str, fallback: str, lightness_percent: float) -> str:
    """Replace the lightness of ``value`` keeping hue and saturation."""
    clamped = min(100.0, max(0.0, lightness_percent))
    rgb = parse_hex(value) or parse_hex(fallback)
    if rgb is None:
        return fallback

    hsl = rgb_to_hsl(rgb)
    return rgb_to_hex(hsl_to_rgb(HslColor(hsl.h, hsl.s, clamped / 100)))


def nudge_lightness(value: str, fallback: str, delta_percent: float) -> str:
    """Step the lightness of a hex color by ``delta_percent``.

    Used for arrow-key input on color fields. The resulting lightness is
    clamped to [0, 100].

    Args:
        value: Hex color to adjust
        fallback: Hex color used when ``value`` does not parse
        delta_percent: Signed lightness step in percent

    Returns:
        The adjusted color as ``#rrggbb``
    """
    current = get_hex_lightness(value, fallback)
    return set_hex_lightness(value, fallback, current + delta_percent)


def format_hex(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return ""
    return trimmed if trimmed.startswith("#") else f"#{trimmed}"


def normalize_hex_input(value: str) -> str:
    """Coerce loosely typed input into a 6-digit ``#rrggbb`` string.

    Non-hex characters are dropped; one and two digit input is repeated,
    three digit input is expanded and longer input is truncated to six digits.
    Returns an empty string when nothing usable remains.
    """
    trimmed = value.strip()
    if trimmed.startswith("#"):
        trimmed = trimmed[1:]
    hex_text = _NON_HEX.sub("", trimmed.lower())

    if not hex_text:
        return ""

    if len(hex_text) == 1:
        hex_text = hex_text * 6
    elif len(hex_text) == 2:
        hex_text = hex_text * 3
    elif len(hex_text) == 3:
        hex_text = "".join(char * 2 for char in hex_text)
    elif len(hex_text) > 6:
        hex_text = hex_text[:6]

    return f"#{hex_text}"


def hex_to_rgb_string(value: str, fallback: str) -> str:
    rgb = parse_hex(value) or parse_hex(fallback)
    if rgb is None:
        return ""
    return f"rgb({rgb.r}, {rgb.g}, {rgb.b})"


def mix_colors(a: RgbColor, b: RgbColor, t: float) -> RgbColor:
    """Linearly mix two colors, ``t`` clamped to [0, 1]."""
    factor = min(1.0, max(0.0, t))
    return RgbColor(
        _round_half_up(a.r + (b.r - a.r) * factor),
        _round_half_up(a.g + (b.g - a.g) * factor),
        _round_half_up(a.b + (b.b - a.b) * factor),
    )


def srgb_channel_to_linear(value: int) -> float:
    channel = value / 255
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RgbColor) -> float:
    """WCAG 2 relative luminance of an sRGB color."""
    r = srgb_channel_to_linear(color.r)
    g = srgb_channel_to_linear(color.g)
    b = srgb_channel_to_linear(color.b)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> float | None:
    """WCAG contrast ratio between two hex colors.

    Args:
        foreground: Text color as hex
        background: Background color as hex

    Returns:
        Ratio in [1, 21], or None if either color fails to parse
    """
    fg = parse_hex(foreground)
    bg = parse_hex(background)
    if fg is None or bg is None:
        return None

    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


class WcagLevel(Enum):
    """Contrast targets offered by the contrast checker."""

    AA_LARGE = "aa-large"
    AA = "aa"
    AAA = "aaa"
    A_PLUS = "a-plus"

    @property
    def ratio(self) -> float:
        return _WCAG_RATIOS[self]


_WCAG_RATIOS = {
    WcagLevel.AA_LARGE: 3.0,
    WcagLevel.AA: 4.5,
    WcagLevel.AAA: 7.0,
    WcagLevel.A_PLUS: 12.5,
}


@dataclass(frozen=True)
class ContrastReport:
    """Contrast ratio of a color pair with pass/fail per WCAG target."""

    ratio: float
    rounded_ratio: float
    passes: dict[WcagLevel, bool]

    def passes_level(self, level: WcagLevel) -> bool:
        return self.passes[level]

    def format_ratio(self) -> str:
        return f"{self.rounded_ratio:.2f} : 1"


def evaluate_contrast(foreground: str, background: str) -> ContrastReport | None:
    """Build a ContrastReport, or None when either color is invalid."""
    ratio = contrast_ratio(foreground, background)
    if ratio is None:
        return None

    return ContrastReport(
        ratio=ratio,
        rounded_ratio=_round_half_up(ratio * 100) / 100,
        passes={level: ratio >= level.ratio for level in WcagLevel},
    )


def suggest_accessible_color(
    foreground: str, background: str, target_ratio: float
) -> str | None:
    """Find the least-shifted foreground that meets ``target_ratio``.

    The foreground is mixed toward black or white, whichever contrasts more
    with the background, using a 20-step bisection on the mix factor.

    Returns:
        The suggested ``#rrggbb`` color, or None when the pair already passes,
        either color is invalid, or no mix reaches the target
    """
    current = contrast_ratio(foreground, background)
    if current is not None and current >= target_ratio:
        return None

    fg = parse_hex(foreground)
    bg = parse_hex(background)
    if fg is None or bg is None:
        return None

    black_ratio = contrast_ratio("#000000", background) or 0.0
    white_ratio = contrast_ratio("#ffffff", background) or 0.0
    target = RgbColor(0, 0, 0) if black_ratio >= white_ratio else RgbColor(255, 255, 255)

    low = 0.0
    high = 1.0
    best: RgbColor | None = None

    for _ in range(20):
        mid = (low + high) / 2
        mixed = mix_colors(fg, target, mid)
        ratio = contrast_ratio(rgb_to_hex(mixed), background)

        if ratio is not None and ratio >= target_ratio:
            best = mixed
            high = mid
        else:
            low = mid

    if best is None:
        return None
    return rgb_to_hex(best)
