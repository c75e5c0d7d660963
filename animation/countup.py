"""Count-up animation for KPI values.

The animation is an explicit state machine: :func:`retarget` applies a change
of inputs (target, duration, enabled) and :func:`step` advances the state to
a frame timestamp. Both are pure, so any scheduling context can drive them.
:class:`CountUpAnimator` binds one state to a :class:`FrameScheduler` and
guarantees a single frame loop per animated value.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Final, Optional

from animation.scheduler import FrameScheduler

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_DURATION_MS",
    "KPI_DURATION_MS",
    "Phase",
    "AnimationState",
    "ease_out_cubic",
    "normalise_target",
    "retarget",
    "step",
    "CountUpAnimator",
]

DEFAULT_DURATION_MS: Final[float] = 1000.0
KPI_DURATION_MS: Final[float] = 1200.0


class Phase(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    SETTLED = "settled"


@dataclass(frozen=True)
class AnimationState:
    current_value: float = 0
    start_value: float = 0
    target_value: float = 0
    start_time: Optional[float] = None
    has_animated: bool = False
    duration_ms: float = DEFAULT_DURATION_MS
    enabled: bool = True
    phase: Phase = Phase.IDLE


def ease_out_cubic(progress: float) -> float:
    return 1 - (1 - progress) ** 3


def normalise_target(target: Any) -> float:
    """Return ``target`` as a number; NaN, negatives and non-numbers become 0."""

    if isinstance(target, bool):
        return 0
    try:
        value = float(target)
    except (TypeError, ValueError):
        return 0
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 0
    return int(value) if value.is_integer() else value


def retarget(
    state: AnimationState,
    target: Any,
    duration_ms: float,
    enabled: bool,
    now: float,
) -> AnimationState:
    """Apply new animator inputs at time ``now``."""

    target = normalise_target(target)

    if (
        state.phase is Phase.ANIMATING
        and target == state.target_value
        and duration_ms == state.duration_ms
        and enabled == state.enabled
    ):
        return state

    state = replace(state, duration_ms=duration_ms, enabled=enabled)

    if not enabled and not state.has_animated:
        # ``enabled`` only gates the first activation.
        return replace(state, current_value=0, start_time=None, phase=Phase.IDLE)

    if target <= 0:
        return replace(
            state,
            current_value=0,
            start_value=0,
            target_value=0,
            start_time=None,
            phase=Phase.IDLE,
        )

    if state.current_value == target:
        return replace(
            state,
            start_value=target,
            target_value=target,
            start_time=None,
            phase=Phase.SETTLED,
        )

    start_value = state.current_value if state.current_value > 0 else 0
    return replace(
        state,
        start_value=start_value,
        target_value=target,
        start_time=now,
        has_animated=True,
        phase=Phase.ANIMATING,
    )


def step(state: AnimationState, now: float) -> AnimationState:
    """Advance an animating state to frame time ``now``."""

    if state.phase is not Phase.ANIMATING:
        return state

    start_time = now if state.start_time is None else state.start_time
    if state.duration_ms <= 0:
        progress = 1.0
    else:
        progress = min(max((now - start_time) / state.duration_ms, 0.0), 1.0)

    if progress >= 1:
        # Snap to the exact target so easing drift never shows.
        return replace(
            state,
            current_value=state.target_value,
            start_time=None,
            phase=Phase.SETTLED,
        )

    span = state.target_value - state.start_value
    value = math.floor(state.start_value + span * ease_out_cubic(progress))
    return replace(state, current_value=value, start_time=start_time)


class CountUpAnimator:
    """Drive one animated value from a frame scheduler.

    Every input change cancels the pending frame before anything new is
    scheduled, and :meth:`close` cancels it for good.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        *,
        duration_ms: float = DEFAULT_DURATION_MS,
        enabled: bool = True,
        initial_value: Any = 0,
        on_change: Optional[Callable[[float], None]] = None,
    ) -> None:
        # A positive initial value resumes a display that already counted up.
        initial = normalise_target(initial_value)
        self._scheduler = scheduler
        self._state = AnimationState(
            current_value=initial,
            start_value=initial,
            target_value=initial,
            has_animated=initial > 0,
            duration_ms=duration_ms,
            enabled=enabled,
            phase=Phase.SETTLED if initial > 0 else Phase.IDLE,
        )
        self._on_change = on_change
        self._handle: Optional[int] = None
        self._closed = False

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def value(self) -> float:
        return self._state.current_value

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def update(
        self,
        target: Any,
        *,
        duration_ms: Optional[float] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        if self._closed:
            raise RuntimeError("Cannot update a closed animator.")

        self._cancel()
        next_state = retarget(
            self._state,
            target,
            self._state.duration_ms if duration_ms is None else duration_ms,
            self._state.enabled if enabled is None else enabled,
            self._scheduler.now(),
        )
        self._apply(next_state)
        if next_state.phase is Phase.ANIMATING:
            self._schedule()

    def close(self) -> None:
        self._cancel()
        self._closed = True

    def __enter__(self) -> "CountUpAnimator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _schedule(self) -> None:
        self._handle = self._scheduler.request_frame(self._on_frame)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None

    def _on_frame(self, timestamp: float) -> None:
        self._handle = None
        if self._closed:
            return
        self._apply(step(self._state, timestamp))
        if self._state.phase is Phase.ANIMATING:
            self._schedule()
        else:
            logger.debug("Count-up settled at %s", self._state.current_value)

    def _apply(self, next_state: AnimationState) -> None:
        changed = next_state.current_value != self._state.current_value
        self._state = next_state
        if changed and self._on_change is not None:
            self._on_change(next_state.current_value)
