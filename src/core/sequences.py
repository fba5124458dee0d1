"""Static macro sequences.

A MacroSequence is an immutable tuple of MacroStep records.  Each step
presses or releases one named key and then holds the playing task for
``delay_ms`` before the next step.  Sequences are built once at import
and never mutated.

Builder helpers keep the tables readable:

    tap("z", d)          → press z, wait d, release z, wait d
    chord("shift_l", "z", d)
                         → shift down, z tap, shift up  (d after each)
    pause(step_seq, ms)  → add ``ms`` to the last step's delay
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from src.core.constants import (
    KEY_INPUT_DELAY_MS as _D,
    ITEM_TAP_DELAY_MS,
    GROUP_PAUSE_MS,
    CONFIRM_PAUSE_MS,
    SAY_GAP_MS,
)


class Action(Enum):
    PRESS   = "press"
    RELEASE = "release"


@dataclass(frozen=True)
class MacroStep:
    action:   Action
    key:      str
    delay_ms: int = _D

    def __post_init__(self) -> None:
        if self.delay_ms < 0:
            raise ValueError(f"negative delay for {self.key!r}: {self.delay_ms}")


MacroSequence = tuple  # tuple[MacroStep, ...]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def press(key: str, delay_ms: int = _D) -> MacroSequence:
    return (MacroStep(Action.PRESS, key, delay_ms),)


def release(key: str, delay_ms: int = _D) -> MacroSequence:
    return (MacroStep(Action.RELEASE, key, delay_ms),)


def tap(key: str, delay_ms: int = _D) -> MacroSequence:
    return press(key, delay_ms) + release(key, delay_ms)


def chord(modifier: str, key: str, delay_ms: int = _D) -> MacroSequence:
    return press(modifier, delay_ms) + tap(key, delay_ms) + release(modifier, delay_ms)


def pause(seq: MacroSequence, extra_ms: int) -> MacroSequence:
    """Return ``seq`` with ``extra_ms`` added after its final step."""
    if not seq:
        raise ValueError("cannot pause an empty sequence")
    last = seq[-1]
    return seq[:-1] + (replace(last, delay_ms=last.delay_ms + extra_ms),)


def total_ms(seq: MacroSequence) -> int:
    return sum(step.delay_ms for step in seq)


def scaled(seq: MacroSequence, base_ms: int) -> MacroSequence:
    """Rebase every default-gap step from KEY_INPUT_DELAY_MS to ``base_ms``.

    Only the primitive gap part of each delay changes; authored pauses
    stacked on top of it are kept as they are.
    """
    if base_ms == _D:
        return seq
    out = []
    for step in seq:
        if step.delay_ms >= _D:
            out.append(replace(step, delay_ms=step.delay_ms - _D + base_ms))
        else:
            out.append(step)
    return tuple(out)


# ---------------------------------------------------------------------------
# Sequence table
# ---------------------------------------------------------------------------

# Alt held across two numeric-pad taps: the in-game "say" shortcut.
SAY = (
    press("alt")
    + pause(tap("kp1"), SAY_GAP_MS)
    + tap("kp3")
    + release("alt")
)

_SKILL_OPEN = pause(chord("shift_l", "z"), GROUP_PAUSE_MS)
_CONFIRM    = tap("enter")

SKILL_O = (
    _SKILL_OPEN
    + chord("shift_l", "o")
    + tap("d")
    + pause(tap("n"), CONFIRM_PAUSE_MS)
    + _CONFIRM
)

SKILL_P = (
    _SKILL_OPEN
    + chord("shift_l", "p")
    + pause(tap("kp4"), CONFIRM_PAUSE_MS)
    + _CONFIRM
)

MENU_CONFIRM = _SKILL_OPEN + tap("m")

ITEM_SELECT = (
    press("ctrl_l")
    + tap("n", ITEM_TAP_DELAY_MS)
    + release("ctrl_l")
)

PASTE_CONFIRM = pause(chord("ctrl_l", "v"), GROUP_PAUSE_MS) + _CONFIRM
