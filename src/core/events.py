"""Domain events produced by the input classifier.

DomainEvent    — flows through the EventChannel to the render loop.
MacroReport    — flows through the status channel once a macro task ends.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DomainEvent(Enum):
    ARM     = "arm"       # operator intends to fire
    TRIGGER = "trigger"   # fire, if armed and off cooldown
    RESET   = "reset"     # abandon the armed state
    IGNORE  = "ignore"    # recognised key with no timer meaning (yet)


@dataclass(frozen=True)
class MacroReport:
    name:    str
    ok:      bool
    detail:  str = ""

    def __str__(self) -> str:
        mark = "ok" if self.ok else "failed"
        return f"{self.name}: {mark}" + (f" ({self.detail})" if self.detail else "")
