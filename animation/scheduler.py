"""Frame schedulers that drive count-up animations."""

from __future__ import annotations

import time
from typing import Callable, Optional, Protocol

__all__ = [
    "FrameCallback",
    "FrameScheduler",
    "ManualFrameScheduler",
    "SleepFrameScheduler",
]

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Something that calls back once per display refresh.

    Timestamps are milliseconds on a monotonic clock.
    """

    def now(self) -> float: ...

    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


class _QueuedScheduler:
    def __init__(self) -> None:
        self._next_handle = 1
        self._pending: dict[int, FrameCallback] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def _run_frame(self, timestamp: float) -> int:
        # Callbacks requested while this frame runs wait for the next one.
        ran = 0
        for handle in list(self._pending):
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(timestamp)
            ran += 1
        return ran


class ManualFrameScheduler(_QueuedScheduler):
    """Deterministic scheduler advanced explicitly by the caller."""

    def __init__(self, start_ms: float = 0.0) -> None:
        super().__init__()
        self._clock = float(start_ms)

    def now(self) -> float:
        return self._clock

    def tick(self, now_ms: Optional[float] = None) -> int:
        """Run one frame at ``now_ms`` (or the current clock); return callbacks run."""

        if now_ms is not None:
            if now_ms < self._clock:
                raise ValueError("Frame clock cannot move backwards.")
            self._clock = float(now_ms)
        return self._run_frame(self._clock)

    def advance(self, delta_ms: float) -> int:
        return self.tick(self._clock + delta_ms)


class SleepFrameScheduler(_QueuedScheduler):
    """Blocking scheduler that runs frames at a fixed rate until idle."""

    def __init__(
        self,
        fps: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        if fps <= 0:
            raise ValueError("fps must be positive.")
        self._interval = 1.0 / fps
        self._sleep = sleep
        self._clock = clock

    def now(self) -> float:
        return self._clock() * 1000.0

    def run_until_idle(self, max_frames: int = 10_000) -> int:
        frames = 0
        while self.pending_count and frames < max_frames:
            self._sleep(self._interval)
            self._run_frame(self.now())
            frames += 1
        return frames
