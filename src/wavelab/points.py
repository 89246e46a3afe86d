"""Seeded wave silhouette generation.

A silhouette is an ordered list of points from ``x = 0`` to ``x = width``.
Generation is a pure function of the parameters: the pseudo-random sequence
is derived from the seed and the sample index only, so identical parameters
always produce bit-identical coordinates.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from .error_handling import ValidationError

SMOOTH_SEGMENT_COUNT = 64
PEAK_SEGMENT_COUNT = 8

# Fraction of the canvas height used as the base vertical range
BASE_RANGE_FACTOR = 0.18


class WavePosition(str, Enum):
    """Canvas edge the filled wave region extends from."""

    TOP = "top"
    BOTTOM = "bottom"


class WaveShape(str, Enum):
    SMOOTH = "smooth"
    PEAKS = "peaks"


@dataclass(frozen=True)
class WavePoint:
    x: float
    y: float


@dataclass(frozen=True)
class WaveParams:
    """Inputs of one silhouette.

    Attributes:
        width: Canvas width in logical units
        height: Canvas height in logical units
        intensity: Amplitude control, clamped to [0, 1] at generation time
        base_height: Vertical anchor of the wave body
        seed: Integer seed of the pseudo-random sequence
        position: Anchor edge of the filled region
        shape: Smooth curve or angular zigzag
    """

    width: float
    height: float
    intensity: float
    base_height: float
    seed: int
    position: WavePosition = WavePosition.BOTTOM
    shape: WaveShape = WaveShape.SMOOTH

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValidationError(
                f"Canvas size must be positive, got {self.width}x{self.height}",
                context={"width": self.width, "height": self.height},
            )
        # Accept plain strings for the enums
        object.__setattr__(self, "position", WavePosition(self.position))
        object.__setattr__(self, "shape", WaveShape(self.shape))

    def evolve(self, **changes) -> WaveParams:
        return replace(self, **changes)


def clamp_intensity(intensity: float) -> float:
    return min(1.0, max(0.0, intensity))


def pseudo_random(seed: int) -> Callable[[int], float]:
    """Deterministic per-index random values in [0, 1).

    ``random(i) = frac(sin(seed * 9973 + i * 4271) * 10000)``
    """

    def random(index: int) -> float:
        value = math.sin(seed * 9973 + index * 4271) * 10000
        return value - math.floor(value)

    return random


def vertical_range(height: float, intensity: float) -> float:
    """Peak offset scale for a canvas height and (unclamped) intensity."""
    return height * BASE_RANGE_FACTOR * (0.3 + clamp_intensity(intensity) * 1.7)


def generate_points(params: WaveParams) -> list[WavePoint]:
    """Generate the silhouette for ``params``.

    Args:
        params: Wave parameters

    Returns:
        65 points for the smooth shape, 9 points for the peaks shape
    """
    random = pseudo_random(params.seed)
    v_range = vertical_range(params.height, params.intensity)

    if params.shape == WaveShape.SMOOTH:
        return _generate_smooth(params, random, v_range)
    return _generate_peaks(params, random, v_range)


def _generate_smooth(
    params: WaveParams, random: Callable[[int], float], v_range: float
) -> list[WavePoint]:
    segment_count = SMOOTH_SEGMENT_COUNT
    step = params.width / segment_count

    frequency = 1 + math.floor(random(0) + 0.5)
    phase = random(1) * math.pi * 2
    phase_long = random(2) * math.pi * 2
    phase_detail = random(3) * math.pi * 2

    points = []
    for index in range(segment_count + 1):
        t = index / segment_count
        angle = t * math.pi * 2 * frequency + phase

        sine = math.sin(angle)
        long = math.sin(t * math.pi * 2 * 0.6 + phase_long)
        detail = math.sin(angle * 2 + phase_detail)
        combined = (sine * 0.6 + long * 0.5 + detail * 0.3) / 1.4

        points.append(WavePoint(step * index, params.base_height + combined * v_range))

    return points


def _generate_peaks(
    params: WaveParams, random: Callable[[int], float], v_range: float
) -> list[WavePoint]:
    segment_count = PEAK_SEGMENT_COUNT
    step = params.width / segment_count

    points = []
    for index in range(segment_count + 1):
        if index == 0 or index == segment_count:
            offset = 0.0
        else:
            direction = 1 if index % 2 == 0 else -1
            offset = direction * (0.4 + random(index) * 0.6) * v_range

        points.append(WavePoint(step * index, params.base_height + offset))

    return points
