"""Cooldown state machine — the single source of truth for "can I fire now?".

States
------
IDLE   armed is False
ARMED  armed is True; remaining may be zero or positive

Transitions
-----------
ARM                                 → armed = True
TRIGGER  armed and remaining == 0   → ready_at = now + duration; armed = False
TRIGGER  otherwise                  → no-op
RESET                               → armed = False
IGNORE                              → no-op

Remaining time is never stored or decremented.  It is derived from the
clock on every query as ``max(0, ready_at - now)`` so a slow or irregular
frame rate cannot make the countdown drift.

The timer is owned by the render loop thread and is not locked.
"""
from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Optional

from src.core.events import DomainEvent

Clock = Callable[[], float]   # seconds, monotonic


class TimerState(Enum):
    IDLE  = "idle"
    ARMED = "armed"


class CooldownTimer:
    """Absolute-deadline cooldown timer.

    Parameters
    ----------
    duration_ms : int
        Fixed cooldown for the session.  Must be positive.
    clock : callable, optional
        Monotonic seconds source; ``time.monotonic`` by default.
    """

    def __init__(self, duration_ms: int, clock: Clock = time.monotonic) -> None:
        if duration_ms <= 0:
            raise ValueError(f"cooldown duration must be positive, got {duration_ms!r}")
        self._clock    = clock
        self._duration = duration_ms / 1000.0
        self.armed     = False
        # Start already expired: the first Trigger after Arm fires immediately.
        self.ready_at  = clock() - self._duration

    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def state(self) -> TimerState:
        return TimerState.ARMED if self.armed else TimerState.IDLE

    def remaining(self, now: Optional[float] = None) -> float:
        """Seconds left on the cooldown, clamped to ``[0, duration]``."""
        if now is None:
            now = self._clock()
        return min(self._duration, max(0.0, self.ready_at - now))

    def ratio(self, now: Optional[float] = None) -> float:
        return self.remaining(now) / self._duration

    def label(self, now: Optional[float] = None) -> str:
        """``SS.ds`` — whole seconds padded to two, tenths truncated."""
        ms = int(self.remaining(now) * 1000)
        return f"{ms // 1000:2}.{(ms % 1000) // 100:1}s"

    # ------------------------------------------------------------------

    def apply(self, event: DomainEvent, now: Optional[float] = None) -> bool:
        """Apply one event.  Returns True when the cooldown was (re)started."""
        if now is None:
            now = self._clock()

        if event is DomainEvent.ARM:
            self.armed = True
        elif event is DomainEvent.TRIGGER:
            if self.armed and self.remaining(now) == 0:
                self.ready_at = now + self._duration
                self.armed = False
                return True
        elif event is DomainEvent.RESET:
            self.armed = False
        return False

    def __repr__(self) -> str:
        return f"CooldownTimer(state={self.state.value}, remaining={self.remaining():.3f})"
