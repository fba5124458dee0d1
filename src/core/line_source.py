"""External line source — ``line N`` of a text file, read fresh each call."""
from __future__ import annotations

from itertools import islice
from pathlib import Path
from typing import Optional


class SourceMissing(Exception):
    """The line source could not be opened or decoded."""


def read_line(path: Path, index: int) -> Optional[str]:
    """Return line ``index`` (0-based) without its line terminator.

    Returns None when the file is shorter than ``index + 1`` lines or the
    index is negative.  Raises SourceMissing when the file cannot be read.
    """
    if index < 0:
        return None
    try:
        with open(path, "r", encoding="utf-8", newline="\n") as f:
            for line in islice(f, index, index + 1):
                if line.endswith("\n"):
                    line = line[:-1]
                    if line.endswith("\r"):
                        line = line[:-1]
                return line
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceMissing(f"{path}: {exc}") from exc
    return None
