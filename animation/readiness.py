"""Delay KPI animations until freshly loaded data has settled on screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["DEFAULT_READY_DELAY_MS", "DataReadyGate"]

DEFAULT_READY_DELAY_MS = 100.0


@dataclass
class DataReadyGate:
    """Becomes ready ``delay_ms`` after loading finishes.

    Starting to load again resets the gate.
    """

    delay_ms: float = DEFAULT_READY_DELAY_MS
    _ready_at: Optional[float] = None

    def update(self, loading: bool, now: float) -> None:
        if loading:
            self._ready_at = None
        elif self._ready_at is None:
            self._ready_at = now + self.delay_ms

    def is_ready(self, now: float) -> bool:
        return self._ready_at is not None and now >= self._ready_at

    def remaining_ms(self, now: float) -> Optional[float]:
        if self._ready_at is None:
            return None
        return max(self._ready_at - now, 0.0)
