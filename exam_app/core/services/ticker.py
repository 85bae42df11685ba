"""Background recurring task that drives the exam clock."""

from __future__ import annotations

import logging
from threading import Event, Thread
from typing import Callable

logger = logging.getLogger(__name__)


class ExamTicker:
    """Calls ``on_tick`` every ``interval_seconds`` until stopped.

    The callback returns False once there is nothing left to tick, which ends
    the loop. Only the scheduling lives here; time is computed from timestamps
    by the callback.
    """

    def __init__(self, on_tick: Callable[[], bool], interval_seconds: float = 1.0) -> None:
        if interval_seconds <= 0:
            raise ValueError("Tick interval must be positive.")
        self._on_tick = on_tick
        self._interval = interval_seconds
        self._stop_event = Event()
        self._thread: Thread | None = None

    def start(self) -> None:
        if self.is_running():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._run, name="ExamTicker", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread.is_alive():
            thread.join(timeout)

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                keep_going = self._on_tick()
            except Exception:
                logger.exception("Exam tick failed")
                continue
            if not keep_going:
                logger.info("Exam ticker finished")
                break
