"""
Analysis Debounce

Collapses bursts of analysis triggers (one per keystroke in an
editor) into a single deferred call. Each trigger cancels the
pending call and schedules a new one; only the last survives.

Usage:
    from mailgrade.debounce import Debouncer
    debounced = Debouncer(lambda html: show(engine.run(html)))
    debounced.trigger(editor_text)
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from mailgrade.config import settings


class Debouncer:
    """Thread-based trailing-edge debounce."""

    def __init__(self, callback: Callable[..., Any], delay_ms: Optional[int] = None):
        self._callback = callback
        self._delay = (settings.DEBOUNCE_MS if delay_ms is None else delay_ms) / 1000
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        """Schedule the callback, cancelling any call still pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._args, self._kwargs = args, kwargs
            timer = threading.Timer(self._delay, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> bool:
        """Run the pending call now. Returns False when nothing was pending."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            args, kwargs = self._args, self._kwargs
        self._callback(*args, **kwargs)
        return True

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None or threading.current_thread() is not self._timer:
                return  # Superseded or cancelled
            self._timer = None
            args, kwargs = self._args, self._kwargs
        self._callback(*args, **kwargs)
