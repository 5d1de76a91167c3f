"""
Trailing-edge debouncer for search-as-you-type endpoints
"""
import itertools
import threading
import time
from dataclasses import dataclass
from typing import Any

from flask import current_app


@dataclass
class DebounceResult:
    fired: bool
    value: Any = None


class Debouncer:
    """Run only the last call made for a key within `wait` seconds

    Every call blocks for `wait` seconds. A call that is followed by another call
    for the same key before its wait elapses is superseded and returns without
    running the function.
    """

    def __init__(self, wait, sleep=time.sleep):
        self.wait = wait
        self._sleep = sleep
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._latest = {}

    def call(self, key, func, *args, **kwargs):
        with self._lock:
            ticket = next(self._sequence)
            self._latest[key] = ticket

        if self.wait > 0:
            self._sleep(self.wait)

        with self._lock:
            if self._latest.get(key) != ticket:
                return DebounceResult(fired=False)
            del self._latest[key]

        return DebounceResult(fired=True, value=func(*args, **kwargs))

    def pending(self, key):
        with self._lock:
            return key in self._latest


def app_debouncer(name, wait_ms):
    """Debouncer shared by all requests of the current app"""
    debouncers = current_app.extensions.setdefault('portal_debouncers', {})
    if name not in debouncers:
        debouncers[name] = Debouncer(wait_ms / 1000.0)
    return debouncers[name]
