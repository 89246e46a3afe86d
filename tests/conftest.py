import pytest

from wavelab.config import DEFAULT_CANVAS_CONFIG
from wavelab.export import CairoRasterizer
from wavelab.generator import WaveGenerator
from wavelab.morph import ManualFrameScheduler
from wavelab.points import WaveParams

# Longer than the 520 ms morph window
MORPH_SETTLE_MS = 600.0


@pytest.fixture
def scheduler():
    """Headless frame clock starting at t=0."""
    return ManualFrameScheduler()


@pytest.fixture
def default_params():
    """Parameters of the wave shown when the generator opens."""
    return WaveParams(
        width=DEFAULT_CANVAS_CONFIG.WIDTH,
        height=DEFAULT_CANVAS_CONFIG.HEIGHT,
        intensity=0.6,
        base_height=100.0,
        seed=1,
        position="bottom",
        shape="smooth",
    )


@pytest.fixture
def generator(scheduler):
    return WaveGenerator(scheduler=scheduler, rasterizer=CairoRasterizer())


@pytest.fixture
def settle(scheduler):
    """Advance the clock past the end of any running morph."""

    def _settle() -> None:
        scheduler.advance(MORPH_SETTLE_MS)

    return _settle
