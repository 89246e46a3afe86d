"""Closed-region SVG path construction from a silhouette.

The filled region spans from the anchor edge (``y = 0`` for top,
``y = height`` for bottom) to the silhouette. Smooth paths route a quadratic
segment through the midpoint of every consecutive point pair; peaks paths use
straight lines so the zigzag corners stay sharp.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from .points import WavePoint, WavePosition, WaveShape


def format_number(value: float) -> str:
    """Render a coordinate the way browsers stringify numbers.

    Integral values drop the decimal part, other values use the shortest
    round-trip form, and very small or very large magnitudes use exponent
    notation without zero padding (``1e-7``, ``1.5e+21``).
    """
    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("Infinity" if value > 0 else "-Infinity")

    if value == 0:
        return "0"

    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        if value == int(value):
            return str(int(value))
        return np.format_float_positional(value, trim="-")

    mantissa, exponent = np.format_float_scientific(value, trim="-").split("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{int(exponent.lstrip('+-'))}"


def _anchor_y(height: float, position: WavePosition | str) -> float:
    return 0 if WavePosition(position) == WavePosition.TOP else height


def _coords(x: float, y: float) -> str:
    return f"{format_number(x)} {format_number(y)}"


def build_smooth_path(
    points: Sequence[WavePoint],
    width: float,
    height: float,
    position: WavePosition | str,
) -> str:
    """Build a tangent-smoothed closed path.

    Args:
        points: Silhouette points
        width: Canvas width
        height: Canvas height
        position: Anchor edge

    Returns:
        SVG path data, or "" for an empty point sequence
    """
    if not points:
        return ""

    anchor = _anchor_y(height, position)
    parts = [f"M 0 {format_number(anchor)}", f"L {_coords(points[0].x, points[0].y)}"]

    if len(points) == 1:
        parts.append(f"L {_coords(width, anchor)}")
        parts.append("Z")
        return " ".join(parts)

    for current, following in zip(points, points[1:]):
        mid_x = (current.x + following.x) / 2
        mid_y = (current.y + following.y) / 2
        parts.append(f"Q {_coords(current.x, current.y)} {_coords(mid_x, mid_y)}")

    last = points[-1]
    parts.append(f"L {_coords(last.x, last.y)}")
    parts.append(f"L {_coords(width, anchor)}")
    parts.append("Z")

    return " ".join(parts)


def build_linear_path(
    points: Sequence[WavePoint],
    width: float,
    height: float,
    position: WavePosition | str,
) -> str:
    """Build a closed path with straight segments between points."""
    if not points:
        return ""

    anchor = _anchor_y(height, position)
    parts = [f"M 0 {format_number(anchor)}"]
    parts.extend(f"L {_coords(point.x, point.y)}" for point in points)
    parts.append(f"L {_coords(width, anchor)}")
    parts.append("Z")

    return " ".join(parts)


def build_path(
    points: Sequence[WavePoint],
    width: float,
    height: float,
    position: WavePosition | str,
    shape: WaveShape | str,
) -> str:
    """Render ``points`` with the path style matching ``shape``."""
    if WaveShape(shape) == WaveShape.SMOOTH:
        return build_smooth_path(points, width, height, position)
    return build_linear_path(points, width, height, position)
