"""Compound macros bound to hotkeys.

ComboInvocation
    Plays several sequences back to back with fixed pauses between them.

IdentifierPaste
    Reads one line from the external line source, puts it on the
    clipboard, and only then plays its chain (select, confirm, paste).
    Any miss along the way (no file, no such line, clipboard refused)
    aborts before a single key is emitted and is reported as a
    PasteOutcome instead of raising.

Both are stateless and safe to run concurrently.  Each ``run(player)``
returns a MacroReport.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from src.core.clipboard import LogFn, set_clipboard
from src.core.constants import COMBO_PAUSE_MS, PASTE_PAUSE_MS
from src.core.events import MacroReport
from src.core.line_source import SourceMissing, read_line
from src.core.sequences import (
    ITEM_SELECT, MENU_CONFIRM, PASTE_CONFIRM, SAY, SKILL_O, SKILL_P,
    MacroSequence,
)

# (sequence, pause_after_ms)
Chain = tuple
ClipboardFn = Callable[[str, Optional[LogFn]], bool]   # (text, log_fn) -> ok


class PasteOutcome(Enum):
    PASTED           = "pasted"
    NO_SOURCE        = "line source unavailable"
    NO_LINE          = "line not found"
    CLIPBOARD_FAILED = "clipboard write failed"


def _play_chain(player, chain: Chain) -> int:
    timeline = player.timeline()
    for sequence, pause_ms in chain:
        player.play(sequence, timeline)
        if pause_ms:
            timeline.hold(pause_ms)
    return len(chain)


@dataclass(frozen=True)
class ComboInvocation:
    name:  str
    chain: Chain

    def run(self, player) -> MacroReport:
        played = _play_chain(player, self.chain)
        return MacroReport(self.name, True, f"{played} sequences")


@dataclass(frozen=True)
class IdentifierPaste:
    name:       str
    source:     Path
    line_index: int
    chain:      Chain
    clipboard:  ClipboardFn = set_clipboard

    def fetch(self, log_fn: Optional[LogFn] = None) -> tuple[PasteOutcome, str]:
        """Read the identifier and push it to the clipboard."""
        try:
            text = read_line(self.source, self.line_index)
        except SourceMissing:
            return PasteOutcome.NO_SOURCE, ""
        if text is None:
            return PasteOutcome.NO_LINE, ""
        if not self.clipboard(text, log_fn):
            return PasteOutcome.CLIPBOARD_FAILED, text
        return PasteOutcome.PASTED, text

    def run(self, player) -> MacroReport:
        outcome, _ = self.fetch(player.log)
        if outcome is not PasteOutcome.PASTED:
            return MacroReport(self.name, False, outcome.value)
        _play_chain(player, self.chain)
        return MacroReport(self.name, True, f"line {self.line_index}")


# ---------------------------------------------------------------------------
# Hotkey table
# ---------------------------------------------------------------------------

def _paste_chain(opener: MacroSequence) -> Chain:
    return (
        (opener,        COMBO_PAUSE_MS),
        (MENU_CONFIRM,  PASTE_PAUSE_MS),
        (PASTE_CONFIRM, 0),
    )


def build_hotkey_macros(
    id_file: Path,
    clipboard: ClipboardFn = set_clipboard,
) -> dict:
    """Return the hotkey name → invocation table."""
    return {
        "f7": ComboInvocation(
            "skill_o+say",
            (
                (SKILL_O, COMBO_PAUSE_MS),
                (SAY,     COMBO_PAUSE_MS),
                (SAY,     0),
            ),
        ),
        "f8": IdentifierPaste("item_paste", id_file, 0, _paste_chain(ITEM_SELECT), clipboard),
        "f9": IdentifierPaste("skill_paste", id_file, 1, _paste_chain(SKILL_P), clipboard),
    }
