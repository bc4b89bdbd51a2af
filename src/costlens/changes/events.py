"""Significant-change notification.

A single no-payload signal fired once per classification pass, whatever
its outcome. Subscribers read the classifier's return value to react.
"""

import logging
import threading
from collections.abc import Callable

__all__ = [
    "SignificantChangeSignal",
]

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class SignificantChangeSignal:
    """Subscriber list for the significant-change notification.

    Listener failures are logged and do not stop the remaining listeners
    or the caller.

    Usage:
        signal = SignificantChangeSignal()
        unsubscribe = signal.subscribe(lambda: refresh_annotations())
        signal.fire()
        unsubscribe()

    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()  # Protects _listeners

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable with no arguments.

        Returns:
            Callable that removes the listener again (idempotent).

        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def fire(self) -> list[Exception]:
        """Notify all listeners in subscription order.

        Returns:
            Exceptions raised by listeners (empty if all succeeded).

        """
        with self._lock:
            listeners = list(self._listeners)

        exceptions: list[Exception] = []
        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.warning("Significant change listener failed: %s", e)
                exceptions.append(e)
        return exceptions

    def clear(self) -> None:
        """Remove all listeners."""
        with self._lock:
            self._listeners.clear()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)
