# designsight/core/inflight.py
import threading
from typing import Callable, Set

Listener = Callable[[int], None]


class InFlightTracker:
    """
    Reference count of requests currently being handled.

    Incremented when a request starts and decremented when it settles, whether
    it succeeded or failed. Subscribers are called synchronously with the new
    count after every change. The count never goes below zero.
    """

    def __init__(self):
        self._count = 0
        self._listeners: Set[Listener] = set()
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return self._count

    def increment(self) -> int:
        with self._lock:
            self._count += 1
            current = self._count
        self._notify(current)
        return current

    def decrement(self) -> int:
        with self._lock:
            self._count = max(0, self._count - 1)
            current = self._count
        self._notify(current)
        return current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it"""
        self._listeners.add(listener)

        def unsubscribe():
            self._listeners.discard(listener)

        return unsubscribe

    def _notify(self, current: int) -> None:
        for listener in list(self._listeners):
            listener(current)


in_flight = InFlightTracker()
