"""ChangeNotifier — per-store event stream fired after each snapshot."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from userdata_timeline.core.models import Resource

log = logging.getLogger(__name__)

Listener = Callable[[Resource], None]


class Subscription:
    """Handle returned by ChangeNotifier.subscribe(); call dispose() to stop."""

    def __init__(self, notifier: ChangeNotifier, listener: Listener) -> None:
        self._notifier = notifier
        self._listener = listener

    def dispose(self) -> None:
        self._notifier._remove(self._listener)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc: object) -> None:
        self.dispose()


class ChangeNotifier:
    """Synchronous multi-subscriber event source.

    Events are delivered to the listeners registered at fire time; nothing is
    buffered, so late subscribers never see earlier events. A failing listener
    is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()
        self._closed = False

    def subscribe(self, listener: Listener) -> Subscription:
        with self._lock:
            if self._closed:
                raise RuntimeError("ChangeNotifier is closed")
            self._listeners.append(listener)
        return Subscription(self, listener)

    def fire(self, resource: Resource) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(resource)
            except Exception:
                log.warning("Change listener failed for %s", resource.value, exc_info=True)

    def close(self) -> None:
        """Drop all listeners; further subscribe() calls raise."""
        with self._lock:
            self._listeners.clear()
            self._closed = True

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def _remove(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
