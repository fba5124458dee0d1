"""Log panel — timestamped, colour-coded log lines under the gauge.

``log(level, message)`` is the LogFn every component receives.  Entries
below ``min_level`` are dropped.  It may be called from any thread; the
render loop paints a snapshot each frame.
"""
from __future__ import annotations

import threading
from collections import deque
from datetime import datetime

from rich.console import Group
from rich.text import Text

from src.core.constants import LOG_MAX_LINES

_LEVEL_COLORS: dict[str, str] = {
    "INFO":    "#D4D4D4",
    "SUCCESS": "#4EC9B0",
    "WARNING": "#CE9178",
    "ERROR":   "#F44747",
    "DEBUG":   "#858585",
}

_LEVEL_RANK: dict[str, int] = {
    "DEBUG":   10,
    "INFO":    20,
    "SUCCESS": 25,
    "WARNING": 30,
    "ERROR":   40,
}


class LogPanel:
    """Bounded, thread-safe buffer of log entries."""

    def __init__(self, max_lines: int = LOG_MAX_LINES, min_level: str = "INFO") -> None:
        self._lines: deque[tuple[str, str, str]] = deque(maxlen=max_lines)
        self._lock = threading.Lock()
        self._min_rank = _LEVEL_RANK.get(min_level.upper(), _LEVEL_RANK["INFO"])

    def log(self, level: str, message: str) -> None:
        """Append a timestamped log entry."""
        level = level.upper()
        if _LEVEL_RANK.get(level, _LEVEL_RANK["INFO"]) < self._min_rank:
            return
        ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        with self._lock:
            self._lines.append((ts, level, message))

    def entries(self) -> list[tuple[str, str, str]]:
        with self._lock:
            return list(self._lines)

    def __rich__(self) -> Group:
        lines = []
        for ts, level, message in self.entries():
            text = Text(f"[{ts}] ", style="#858585")
            text.append(f"[{level:7}] {message}", style=_LEVEL_COLORS.get(level, "#D4D4D4"))
            lines.append(text)
        return Group(*lines)
