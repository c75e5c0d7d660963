"""Count-up animation primitives for Stockroom KPI cards."""

from .countup import (
    DEFAULT_DURATION_MS,
    KPI_DURATION_MS,
    AnimationState,
    CountUpAnimator,
    Phase,
    ease_out_cubic,
    normalise_target,
    retarget,
    step,
)
from .readiness import DataReadyGate
from .scheduler import FrameScheduler, ManualFrameScheduler, SleepFrameScheduler

__all__ = [
    "DEFAULT_DURATION_MS",
    "KPI_DURATION_MS",
    "AnimationState",
    "CountUpAnimator",
    "Phase",
    "ease_out_cubic",
    "normalise_target",
    "retarget",
    "step",
    "DataReadyGate",
    "FrameScheduler",
    "ManualFrameScheduler",
    "SleepFrameScheduler",
]
