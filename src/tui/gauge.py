"""Cooldown gauge and the full-frame view.

CooldownGauge draws a one-line bar: the first ``ratio`` of the width is
filled and the label is centred over it.  At ``ratio == 0`` the whole bar
switches to the ready style.
"""
from __future__ import annotations

from rich import box
from rich.console import Console, ConsoleOptions, Group, RenderResult
from rich.panel import Panel
from rich.text import Text

TITLE       = " Skill Cool Time "
FOOTER      = " F7 combo  F8/F9 paste "
READY_STYLE = "black on bright_green"
FILL_STYLE  = "white on green"
EMPTY_STYLE = "white"
BORDER      = "bright_green"


class CooldownGauge:
    def __init__(self, ratio: float, label: str) -> None:
        self.ratio = min(1.0, max(0.0, ratio))
        self.label = label

    def filled_cells(self, width: int) -> int:
        return int(round(self.ratio * width))

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        width = max(len(self.label), options.max_width)
        start = (width - len(self.label)) // 2
        line  = (" " * start + self.label).ljust(width)

        text = Text(line)
        if self.ratio == 0.0:
            text.stylize(READY_STYLE)
        else:
            filled = self.filled_cells(width)
            text.stylize(FILL_STYLE, 0, filled)
            text.stylize(EMPTY_STYLE, filled, width)
        yield text


def render_view(ratio: float, label: str, footer: str = "", log=None) -> Group:
    """Build the frame: bordered gauge panel, then the log lines.

    ``footer`` replaces the fixed FOOTER label once there is something to say.
    """
    panel = Panel(
        CooldownGauge(ratio, label),
        title=TITLE,
        subtitle=Text(footer or FOOTER),
        subtitle_align="right",
        box=box.ROUNDED,
        border_style=BORDER,
    )
    if log is None:
        return Group(panel)
    return Group(panel, log)
