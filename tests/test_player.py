"""Tests for src.core.player — MacroPlayer timing, ordering and spawning."""
import threading
from unittest.mock import patch

import pytest

from conftest import FakeController
from src.core import sequences as seq
from src.core.events import MacroReport
from src.core.player import MacroPlayer, Timeline
from src.core.sequences import Action, MacroStep


def _player(controller, clock, **kw):
    return MacroPlayer(controller, clock=clock, sleep=clock.sleep, **kw)


class TestTimeline:
    def test_holds_accumulate_from_anchor(self, clock):
        tl = Timeline(clock, clock.sleep)
        start = clock()
        tl.hold(100)
        tl.hold(50)
        assert clock() - start == pytest.approx(0.150)

    def test_gap_measured_from_last_event(self, clock):
        tl = Timeline(clock, clock.sleep)
        clock.advance(0.030)            # e.g. a slow controller call
        tl.mark()
        emitted = clock()
        tl.hold(100)
        assert clock.sleeps == [pytest.approx(0.100)]
        assert clock() - emitted == pytest.approx(0.100)

    def test_chained_holds_stack(self, clock):
        tl = Timeline(clock, clock.sleep)
        tl.mark()
        emitted = clock()
        tl.hold(20)
        clock.advance(0.005)            # late wake-up
        tl.hold(500)
        assert clock() - emitted >= 0.520 - 1e-9

    def test_overrun_does_not_sleep(self, clock):
        tl = Timeline(clock, clock.sleep)
        clock.advance(0.5)
        tl.hold(100)
        assert clock.sleeps == []


class TestPlay:
    def test_order_and_gaps_preserved(self, controller, clock):
        sequence = (
            MacroStep(Action.PRESS,   "a", 30),
            MacroStep(Action.RELEASE, "a", 10),
            MacroStep(Action.PRESS,   "b", 50),
            MacroStep(Action.RELEASE, "b", 0),
        )
        start = clock()
        _player(controller, clock).play(sequence)

        assert controller.keys == [("press", "a"), ("release", "a"), ("press", "b"), ("release", "b")]
        offsets = [t - start for _, _, t, _ in controller.events]
        assert offsets == pytest.approx([0.0, 0.030, 0.040, 0.090])

    def test_resolve_maps_names(self, controller, clock):
        player = _player(controller, clock)
        player._resolve = str.upper
        player.play((MacroStep(Action.PRESS, "x", 0),))
        assert controller.keys == [("press", "X")]

    def test_unknown_key_raises(self, controller, clock):
        player = MacroPlayer(controller, lambda name: None, clock=clock, sleep=clock.sleep)
        with pytest.raises(ValueError, match="Unknown key"):
            player.play((MacroStep(Action.PRESS, "nope", 0),))

    def test_keywait_rebases_primitive_gaps(self, controller, clock):
        sequence = (
            MacroStep(Action.PRESS,   "a", 20),
            MacroStep(Action.RELEASE, "a", 70),
        )
        start = clock()
        _player(controller, clock, keywait=10).play(sequence)
        assert controller.events[1][2] - start == pytest.approx(0.010)
        assert clock() - start == pytest.approx(0.070)

    def test_late_wakeup_never_shortens_later_gaps(self, clock):
        controller = FakeController(clock)
        overslept = []

        def sleep(seconds):
            if not overslept:
                overslept.append(seconds)
                seconds += 0.060
            clock.sleep(seconds)

        player = MacroPlayer(controller, clock=clock, sleep=sleep)
        player.play(seq.SAY)

        authored = [step.delay_ms / 1000 for step in seq.SAY[:-1]]
        times = [t for _, _, t, _ in controller.events]
        gaps = [b - a for a, b in zip(times, times[1:])]
        assert controller.keys == [(s.action.value, s.key) for s in seq.SAY]
        for gap, delay in zip(gaps, authored):
            assert gap >= delay - 1e-9
        assert gaps[0] == pytest.approx(authored[0] + 0.060)
        assert gaps[1:] == pytest.approx(authored[1:])

    def test_shared_timeline_spans_sequences(self, controller, clock):
        player = _player(controller, clock)
        tl = player.timeline()
        start = clock()
        player.play((MacroStep(Action.PRESS, "a", 20),), tl)
        tl.hold(500)
        player.play((MacroStep(Action.RELEASE, "a", 20),), tl)
        assert controller.events[1][2] - start == pytest.approx(0.520)


class _Invocation:
    def __init__(self, name="inv", gate=None, error=None):
        self.name  = name
        self.gate  = gate
        self.error = error
        self.ran   = threading.Event()

    def run(self, player):
        self.ran.set()
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return MacroReport(self.name, True)


class TestSpawn:
    def _rig(self, **kw):
        reports, logs = [], []
        player = MacroPlayer(
            object(), sleep=lambda s: None,
            report_fn=reports.append,
            log_fn=lambda level, msg: logs.append((level, msg)),
            **kw,
        )
        return player, reports, logs

    def test_runs_on_daemon_thread(self):
        player, reports, _ = self._rig()
        inv = _Invocation()
        thread = player.spawn(inv)
        thread.join(5)
        assert thread.daemon
        assert thread is not threading.current_thread()
        assert reports == [MacroReport("inv", True)]
        assert player.running == 0

    def test_overlap_allowed_by_default(self):
        player, reports, _ = self._rig()
        gate = threading.Event()
        first, second = _Invocation("a", gate), _Invocation("b", gate)
        t1 = player.spawn(first)
        t2 = player.spawn(second)
        assert first.ran.wait(5) and second.ran.wait(5)
        assert player.running == 2
        gate.set()
        t1.join(5)
        t2.join(5)
        assert sorted(r.name for r in reports) == ["a", "b"]

    def test_busy_guard_rejects_second(self):
        player, reports, logs = self._rig(allow_overlap=False)
        gate = threading.Event()
        first = _Invocation("a", gate)
        t1 = player.spawn(first)
        first.ran.wait(5)

        assert player.spawn(_Invocation("b")) is None
        assert reports == [MacroReport("b", False, "busy")]
        assert any(level == "WARNING" for level, _ in logs)

        gate.set()
        t1.join(5)
        t3 = player.spawn(_Invocation("c"))
        assert t3 is not None
        t3.join(5)
        assert reports[-1] == MacroReport("c", True)

    def test_failure_is_reported_not_raised(self):
        player, reports, logs = self._rig(allow_overlap=False)
        thread = player.spawn(_Invocation("boom", error=RuntimeError("x")))
        thread.join(5)
        assert reports == [MacroReport("boom", False, "RuntimeError")]
        assert any(level == "ERROR" for level, _ in logs)
        # slot released after the failure
        again = player.spawn(_Invocation("next"))
        again.join(5)
        assert reports[-1].ok

    def test_start_failure_releases_slot(self):
        player, reports, logs = self._rig(allow_overlap=False)
        with patch("threading.Thread.start", side_effect=RuntimeError("can't start new thread")):
            assert player.spawn(_Invocation("a")) is None
        assert player.running == 0
        assert reports == [MacroReport("a", False, "not started")]
        assert any(level == "ERROR" for level, _ in logs)

        thread = player.spawn(_Invocation("b"))
        assert thread is not None
        thread.join(5)
        assert reports[-1] == MacroReport("b", True)
