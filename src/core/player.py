"""Macro playback engine.

Architecture
------------
MacroPlayer (shared, any thread)
  └─ one daemon thread per spawn() call
       └─ invocation.run(player)           — src.core.invocations
            └─ player.play(sequence, timeline)
                 ├─ controller.press / controller.release
                 └─ timeline.hold(step.delay_ms)

Timing
------
Each ``hold(ms)`` waits until ``ms`` after the last emitted key event
(``mark``, taken when the controller call returns), so an authored
delay is a lower bound on the gap between two events.  A late wake-up pushes the
rest of the chain back instead of being caught up.

Concurrency
-----------
Invocations share nothing but the controller.  With ``allow_overlap`` (the
default) any number may run at once; without it a single-slot guard turns
away a new invocation while one is still playing.  A started invocation
always runs to completion.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional

from src.core.constants import KEY_INPUT_DELAY_MS
from src.core.events import MacroReport
from src.core.sequences import Action, MacroSequence, scaled

LogFn    = Callable[[str, str], None]       # (level, message)
ReportFn = Callable[[MacroReport], None]


def _default_output() -> tuple[Any, Callable[[str], Any]]:
    from pynput import keyboard
    from src.core.keys import parse_key
    return keyboard.Controller(), parse_key


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

class Timeline:
    """Waits measured from the last key event, never shorter than asked."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock    = clock
        self._sleep    = sleep
        self._last     = clock()

    def mark(self) -> None:
        """Record that a key event was just emitted."""
        self._last = self._clock()

    def hold(self, ms: float) -> None:
        target = self._last + ms / 1000.0
        delay  = target - self._clock()
        if delay > 0:
            self._sleep(delay)
        # consecutive holds (pauses between sequences) stack on each other
        self._last = target


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class MacroPlayer:
    """Plays MacroSequences through a keyboard controller.

    Parameters
    ----------
    controller : object with ``press(key)`` / ``release(key)``, optional
        Defaults to ``pynput.keyboard.Controller()``.
    resolve : callable, optional
        Key name → controller key.  Defaults to ``src.core.keys.parse_key``.
    keywait : int
        Primitive gap in ms; sequences authored with the default gap are
        rebased onto it.
    allow_overlap : bool
        Concurrency policy for spawn().
    log_fn, report_fn : callable, optional
        Log sink and per-invocation outcome sink.
    """

    def __init__(
        self,
        controller=None,
        resolve: Optional[Callable[[str], Any]] = None,
        *,
        keywait:       int = KEY_INPUT_DELAY_MS,
        allow_overlap: bool = True,
        clock:         Callable[[], float] = time.monotonic,
        sleep:         Callable[[float], None] = time.sleep,
        log_fn:        LogFn | None = None,
        report_fn:     ReportFn | None = None,
    ) -> None:
        if controller is None:
            controller, default_resolve = _default_output()
            resolve = resolve or default_resolve
        self._kc            = controller
        self._resolve       = resolve or (lambda name: name)
        self._keywait       = keywait
        self._allow_overlap = allow_overlap
        self._clock         = clock
        self._sleep         = sleep
        self._log           = log_fn or (lambda level, msg: None)
        self._report        = report_fn or (lambda report: None)
        self._slot          = threading.Lock()
        self._count_lock    = threading.Lock()
        self._running       = 0

    # ------------------------------------------------------------------

    @property
    def running(self) -> int:
        """Number of invocations currently playing."""
        with self._count_lock:
            return self._running

    @property
    def log(self) -> LogFn:
        return self._log

    def timeline(self) -> Timeline:
        return Timeline(self._clock, self._sleep)

    def play(self, sequence: MacroSequence, timeline: Timeline | None = None) -> None:
        """Play every step in order on the calling thread."""
        timeline = timeline or self.timeline()
        for step in scaled(sequence, self._keywait):
            key = self._resolve(step.key)
            if key is None:
                raise ValueError(f"Unknown key: {step.key!r}")
            if step.action is Action.PRESS:
                self._kc.press(key)
            else:
                self._kc.release(key)
            timeline.mark()
            timeline.hold(step.delay_ms)

    # ------------------------------------------------------------------

    def spawn(self, invocation) -> Optional[threading.Thread]:
        """Run ``invocation`` on a fresh daemon thread.

        Returns the started thread, or None when the busy guard refused it
        or the thread could not be started.
        """
        if not self._allow_overlap and not self._slot.acquire(blocking=False):
            self._log("WARNING", f"{invocation.name}: another macro is still playing")
            self._report(MacroReport(invocation.name, False, "busy"))
            return None

        thread = threading.Thread(
            target=self._run_task,
            args=(invocation,),
            name=f"macro-{invocation.name}",
            daemon=True,
        )
        with self._count_lock:
            self._running += 1
        try:
            thread.start()
        except RuntimeError as exc:
            with self._count_lock:
                self._running -= 1
            if not self._allow_overlap:
                self._slot.release()
            self._log("ERROR", f"{invocation.name}: {exc}")
            self._report(MacroReport(invocation.name, False, "not started"))
            return None
        return thread

    def _run_task(self, invocation) -> None:
        self._log("DEBUG", f"{invocation.name}: start")
        try:
            report = invocation.run(self)
        except Exception as exc:          # noqa: BLE001
            self._log("ERROR", f"{invocation.name}: {exc!r}")
            report = MacroReport(invocation.name, False, type(exc).__name__)
        finally:
            with self._count_lock:
                self._running -= 1
            if not self._allow_overlap:
                self._slot.release()

        self._log("SUCCESS" if report.ok else "WARNING", str(report))
        self._report(report)
