"""Render loop — single thread, cooperative, never blocks.

Each iteration:
  1. take at most one DomainEvent off the channel and apply it to the timer
  2. take any finished-macro reports off the status channel
  3. repaint the whole frame from the timer's derived values

The timer is touched by this thread only.  Input hooks and macro tasks
reach it exclusively through the channels.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from rich.console import Console
from rich.live import Live

from src.core.channel import EventChannel
from src.core.constants import FRAME_MS
from src.core.cooldown import CooldownTimer
from src.core.events import DomainEvent, MacroReport
from src.tui.gauge import render_view
from src.tui.log_panel import LogPanel


class App:
    """Owns the CooldownTimer and paints it every frame.

    Parameters
    ----------
    timer : CooldownTimer
    events : EventChannel[DomainEvent]
        Consumer side of the classifier's channel.
    reports : EventChannel[MacroReport], optional
        Consumer side of the macro status channel.
    log : LogPanel, optional
    frame_ms : int
        Pause after each iteration.
    """

    def __init__(
        self,
        timer:    CooldownTimer,
        events:   EventChannel,
        reports:  Optional[EventChannel] = None,
        log:      Optional[LogPanel] = None,
        frame_ms: int = FRAME_MS,
        sleep:    Callable[[float], None] = time.sleep,
    ) -> None:
        self.timer     = timer
        self._events   = events
        self._reports  = reports
        self._log      = log
        self._frame_s  = frame_ms / 1000.0
        self._sleep    = sleep
        self.exit      = False
        self.footer    = ""

    # ------------------------------------------------------------------

    def request_exit(self) -> None:
        self.exit = True

    def step(self, now: Optional[float] = None) -> Optional[DomainEvent]:
        """One loop iteration minus the paint.  Returns the event applied."""
        event = self._events.try_recv()
        if event is not None:
            if self.timer.apply(event, now) and self._log is not None:
                self._log.log("INFO", "cooldown started")

        if self._reports is not None:
            while (report := self._reports.try_recv()) is not None:
                self._on_report(report)
        return event

    def _on_report(self, report: MacroReport) -> None:
        self.footer = f" {report} "

    def view(self, now: Optional[float] = None):
        return render_view(
            self.timer.ratio(now),
            self.timer.label(now),
            footer=self.footer,
            log=self._log,
        )

    # ------------------------------------------------------------------

    def run(self, console: Optional[Console] = None) -> None:
        """Drive step()/view() until ``exit`` is set or Ctrl+C."""
        console = console or Console()
        try:
            with Live(
                self.view(),
                console=console,
                auto_refresh=False,
                screen=True,
                transient=True,
            ) as live:
                while not self.exit:
                    self.step()
                    live.update(self.view(), refresh=True)
                    if self._frame_s:
                        self._sleep(self._frame_s)
        except KeyboardInterrupt:
            self.exit = True
