from __future__ import annotations

from threading import Event

import pytest

from exam_app.core.services.ticker import ExamTicker


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        ExamTicker(lambda: True, interval_seconds=0)


def test_ticker_stops_when_callback_returns_false():
    calls = []
    finished = Event()

    def on_tick() -> bool:
        calls.append(1)
        if len(calls) >= 3:
            finished.set()
            return False
        return True

    ticker = ExamTicker(on_tick, interval_seconds=0.01)
    ticker.start()
    assert finished.wait(timeout=5)
    ticker.stop(timeout=5)
    assert not ticker.is_running()
    assert len(calls) == 3


def test_failing_callback_does_not_stop_ticker():
    calls = []
    finished = Event()

    def on_tick() -> bool:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        finished.set()
        return False

    ticker = ExamTicker(on_tick, interval_seconds=0.01)
    ticker.start()
    assert finished.wait(timeout=5)
    ticker.stop(timeout=5)
    assert len(calls) == 2


def test_stop_ends_loop():
    ticked = Event()

    def on_tick() -> bool:
        ticked.set()
        return True

    ticker = ExamTicker(on_tick, interval_seconds=0.01)
    ticker.start()
    assert ticked.wait(timeout=5)
    ticker.stop(timeout=5)
    assert not ticker.is_running()
