# tests/test_debounce.py

from __future__ import annotations

import threading

from taskboard.debounce import Debouncer

from .fakes import FakeTimer


class TimerLog:
    def __init__(self) -> None:
        self.timers: list = []

    def __call__(self, delay, function, args=()):
        timer = FakeTimer(delay, function, args)
        self.timers.append(timer)
        return timer


def test_only_last_call_in_quiet_window_fires():
    calls = []
    timers = TimerLog()
    debounced = Debouncer(0.3, calls.append, timer_factory=timers)
    for text in ("s", "sc", "sch"):
        debounced(text)
    assert [t.delay for t in timers.timers] == [0.3, 0.3, 0.3]
    assert [t.cancelled for t in timers.timers] == [True, True, False]
    assert debounced.pending
    timers.timers[-1].fire()
    assert calls == ["sch"]
    assert not debounced.pending


def test_stale_timer_firing_is_ignored():
    calls = []
    timers = TimerLog()
    debounced = Debouncer(0.3, calls.append, timer_factory=timers)
    debounced("old")
    debounced("new")
    timers.timers[0].fire()
    assert calls == []
    timers.timers[1].fire()
    assert calls == ["new"]


def test_cancel_drops_pending_call():
    calls = []
    timers = TimerLog()
    debounced = Debouncer(0.3, calls.append, timer_factory=timers)
    debounced("x")
    debounced.cancel()
    assert timers.timers[0].cancelled
    timers.timers[0].fire()
    assert calls == []
    assert not debounced.pending


def test_flush_runs_pending_call_immediately():
    calls = []
    timers = TimerLog()
    debounced = Debouncer(0.3, calls.append, timer_factory=timers)
    debounced.flush()
    assert calls == []
    debounced("now")
    debounced.flush()
    assert calls == ["now"]
    timers.timers[0].fire()
    assert calls == ["now"]


def test_real_timer_fires_once():
    fired = threading.Event()
    calls = []

    def callback(text):
        calls.append(text)
        fired.set()

    debounced = Debouncer(0.01, callback)
    debounced("a")
    debounced("ab")
    assert fired.wait(2.0)
    assert calls == ["ab"]
