"""Clipboard capability — write-only, via pyperclip."""
from __future__ import annotations

from typing import Callable

import pyperclip

LogFn = Callable[[str, str], None]


def set_clipboard(text: str, log_fn: LogFn | None = None) -> bool:
    """Copy ``text`` to the system clipboard.  Returns False on failure."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        if log_fn is not None:
            log_fn("WARNING", f"clipboard: {exc}")
        return False
    return True
