"""Debounced callbacks.

Each call cancels the pending timer and schedules a new one with the
latest arguments, so only the last call inside a quiet window runs.
"""
from __future__ import annotations
import threading
from typing import Any, Callable, Optional, Tuple

TimerFactory = Callable[[float, Callable[..., None], Tuple[Any, ...]], Any]


class Debouncer:
    def __init__(
        self,
        delay: float,
        callback: Callable[..., None],
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory or threading.Timer
        self._lock = threading.Lock()
        self._timer: Any = None
        self._args: Tuple[Any, ...] = ()
        self._token: object = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def __call__(self, *args: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._args = args
            self._token = object()
            timer = self._timer_factory(self.delay, self._fire, (self._token,))
            self._timer = timer
        if hasattr(timer, "daemon"):
            timer.daemon = True
        timer.start()

    def _fire(self, token: object) -> None:
        with self._lock:
            # a cancelled timer can still fire if it was already running
            if self._timer is None or token is not self._token:
                return
            args = self._args
            self._timer = None
        self.callback(*args)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None

    def flush(self) -> None:
        """Run the pending call now, if there is one."""
        with self._lock:
            if self._timer is None:
                return
            self._timer.cancel()
            self._timer = None
            args = self._args
        self.callback(*args)
