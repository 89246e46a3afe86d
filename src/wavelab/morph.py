"""Animated morphing between two silhouettes.

The engine is frame driven: a scheduler calls back once per frame, each
callback recomputes the blended silhouette for the elapsed time and re-renders
the path. Only one morph session is ever active. Starting a new morph cancels
the pending frame of the previous session and starts from whatever points
were rendered last, so rapid input changes chain smoothly.

Schedulers:
    ManualFrameScheduler: explicit clock, advanced by the caller (headless
        rendering and tests)
    MonotonicFrameScheduler: wall clock, blocks in ``run_until_idle`` at a
        fixed frame rate
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .config import DEFAULT_CANVAS_CONFIG, DEFAULT_MORPH_CONFIG, CanvasConfig, MorphConfig
from .paths import build_path
from .points import WaveParams, WavePoint, WavePosition, WaveShape, generate_points

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


def ease_in_out_quad(ratio: float) -> float:
    """Symmetric quadratic ease-in-out on [0, 1]."""
    if ratio < 0.5:
        return 2 * ratio * ratio
    return 1 - ((-2 * ratio + 2) ** 2) / 2


def blend_points(
    from_points: Sequence[WavePoint], to_points: Sequence[WavePoint], eased: float
) -> list[WavePoint]:
    """Interpolate two silhouettes index by index.

    The shorter sequence reuses its last point for the extra indices, which
    lets silhouettes with different sample counts (smooth and peaks) blend.
    """
    if not from_points:
        return list(to_points)
    if not to_points:
        return list(from_points)

    last_from = len(from_points) - 1
    last_to = len(to_points) - 1

    blended = []
    for index in range(max(len(from_points), len(to_points))):
        start = from_points[min(index, last_from)]
        end = to_points[min(index, last_to)]
        blended.append(
            WavePoint(
                start.x + (end.x - start.x) * eased,
                start.y + (end.y - start.y) * eased,
            )
        )
    return blended


class FrameScheduler(Protocol):
    """Host frame clock used by the animator."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback(now_ms)`` for the next frame and return a handle."""
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


class ManualFrameScheduler:
    """Frame scheduler driven by explicit ``advance``/``tick`` calls.

    Callbacks requested while a frame is being dispatched run on the next
    tick, never on the current one.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._handles = itertools.count(1)
        self._pending: dict[int, FrameCallback] = {}

    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        return len(self._pending)

    def tick(self) -> int:
        """Dispatch every callback pending at the start of this frame.

        Returns:
            Number of callbacks invoked
        """
        batch = list(self._pending.items())
        self._pending.clear()

        now = self.now()
        invoked = 0
        for _handle, callback in batch:
            callback(now)
            invoked += 1
        return invoked

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and dispatch one frame."""
        self._now += ms
        return self.tick()


class MonotonicFrameScheduler(ManualFrameScheduler):
    """Wall-clock scheduler for blocking, non-interactive use."""

    def __init__(self, frame_rate: int = DEFAULT_MORPH_CONFIG.FRAME_RATE):
        super().__init__()
        self.frame_interval = 1.0 / frame_rate

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def run_until_idle(self, max_frames: int = 10_000) -> int:
        """Tick at the configured frame rate until nothing is pending."""
        frames = 0
        while self.pending_frames and frames < max_frames:
            time.sleep(self.frame_interval)
            self.tick()
            frames += 1
        return frames


@dataclass
class MorphSession:
    """State of one in-flight animation."""

    from_points: list[WavePoint]
    to_points: list[WavePoint]
    start_ms: float
    duration_ms: float
    target_position: WavePosition | None = None
    target_shape: WaveShape | None = None
    frame_handle: int | None = field(default=None, repr=False)
    frames_rendered: int = 0

    def progress(self, now: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.start_ms) / self.duration_ms))


class MorphAnimator:
    """Cancellable frame loop interpolating between two point sequences."""

    def __init__(self, scheduler: FrameScheduler):
        self.scheduler = scheduler
        self._session: MorphSession | None = None
        self._on_frame: Callable[[list[WavePoint]], None] | None = None
        self._on_complete: Callable[[], None] | None = None

    @property
    def session(self) -> MorphSession | None:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._session is not None

    def start(
        self,
        from_points: Sequence[WavePoint],
        to_points: Sequence[WavePoint],
        duration_ms: float,
        on_frame: Callable[[list[WavePoint]], None],
        on_complete: Callable[[], None] | None = None,
        target_position: WavePosition | None = None,
        target_shape: WaveShape | None = None,
    ) -> MorphSession:
        """Begin a new session, cancelling any session still in flight.

        Args:
            from_points: Source silhouette
            to_points: Target silhouette, rendered exactly on the last frame
            duration_ms: Length of the animation window
            on_frame: Receives the blended points of every frame
            on_complete: Called once after the final frame
            target_position: Anchor edge the frames are rendered with
            target_shape: Path style the frames are rendered with

        Returns:
            The new session
        """
        self.cancel()

        session = MorphSession(
            from_points=list(from_points),
            to_points=list(to_points),
            start_ms=self.scheduler.now(),
            duration_ms=duration_ms,
            target_position=target_position,
            target_shape=target_shape,
        )
        self._session = session
        self._on_frame = on_frame
        self._on_complete = on_complete
        session.frame_handle = self.scheduler.request_frame(
            lambda now: self._step(session, now)
        )
        return session

    def cancel(self) -> bool:
        """Drop the active session and its pending frame, if any."""
        session = self._session
        if session is None:
            return False

        if session.frame_handle is not None:
            self.scheduler.cancel_frame(session.frame_handle)
        self._session = None
        self._on_frame = None
        self._on_complete = None
        logger.debug(f"Cancelled morph after {session.frames_rendered} frames")
        return True

    def _step(self, session: MorphSession, now: float) -> None:
        if self._session is not session:
            return

        ratio = session.progress(now)
        on_frame = self._on_frame
        session.frames_rendered += 1

        if ratio < 1:
            on_frame(blend_points(session.from_points, session.to_points, ease_in_out_quad(ratio)))
            session.frame_handle = self.scheduler.request_frame(
                lambda next_now: self._step(session, next_now)
            )
            return

        on_complete = self._on_complete
        self._session = None
        self._on_frame = None
        self._on_complete = None
        session.frame_handle = None

        on_frame(list(session.to_points))
        logger.debug(f"Morph completed in {session.frames_rendered} frames")
        if on_complete is not None:
            on_complete()


class MorphState(str, Enum):
    IDLE = "idle"
    MORPHING = "morphing"


class MorphEngine:
    """Displayed silhouette plus the morph loop that updates it.

    Args:
        scheduler: Frame clock; a ManualFrameScheduler when omitted
        canvas: Logical canvas the paths are rendered on
        morph_config: Animation timing
        on_render: Optional callback receiving the path data of every render
    """

    def __init__(
        self,
        scheduler: FrameScheduler | None = None,
        canvas: CanvasConfig = DEFAULT_CANVAS_CONFIG,
        morph_config: MorphConfig = DEFAULT_MORPH_CONFIG,
        on_render: Callable[[str], None] | None = None,
    ):
        self.scheduler = scheduler if scheduler is not None else ManualFrameScheduler()
        self.canvas = canvas
        self.duration_ms = morph_config.DURATION_MS
        self.on_render = on_render
        self.animator = MorphAnimator(self.scheduler)

        self.current_points: list[WavePoint] = []
        self.current_path = ""
        self.position = WavePosition.BOTTOM
        self.shape = WaveShape.SMOOTH

    @property
    def state(self) -> MorphState:
        return MorphState.MORPHING if self.animator.is_running else MorphState.IDLE

    @property
    def session(self) -> MorphSession | None:
        return self.animator.session

    def show(self, params: WaveParams) -> str:
        """Render ``params`` immediately, cancelling any morph in flight."""
        self.animator.cancel()
        self._render(generate_points(params), params.position, params.shape)
        return self.current_path

    def morph(
        self,
        from_params: WaveParams,
        to_params: WaveParams,
        on_complete: Callable[[], None] | None = None,
    ) -> MorphSession:
        """Animate from the displayed silhouette to the one for ``to_params``.

        ``from_params`` is only used when nothing has been rendered yet;
        otherwise the source is the last rendered (possibly mid-flight) frame.
        """
        if self.current_points:
            from_points = list(self.current_points)
        else:
            from_points = generate_points(from_params)
        to_points = generate_points(to_params)

        if self.animator.is_running:
            logger.debug("Superseding in-flight morph")

        position = to_params.position
        shape = to_params.shape
        return self.animator.start(
            from_points,
            to_points,
            self.duration_ms,
            on_frame=lambda points: self._render(points, position, shape),
            on_complete=on_complete,
            target_position=position,
            target_shape=shape,
        )

    def _render(
        self, points: list[WavePoint], position: WavePosition, shape: WaveShape
    ) -> None:
        self.current_points = points
        self.position = position
        self.shape = shape
        self.current_path = build_path(
            points, self.canvas.WIDTH, self.canvas.HEIGHT, position, shape
        )
        if self.on_render is not None:
            self.on_render(self.current_path)
