# src/todolist/core/events.py

"""
Notification bus.

Decouples task mutations from view refresh:
- mutators never call rendering code,
- callers publish TASKS_UPDATED after a successful mutation,
- views subscribe and re-read the store when notified.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

TASKS_UPDATED = "tasksUpdated"

Subscriber = Callable[[Any], None]


class _Registration:
    """One subscribe() call; identity distinguishes duplicate callbacks."""

    __slots__ = ("callback",)

    def __init__(self, callback: Subscriber) -> None:
        self.callback = callback


class Subscription:
    """
    Handle for a single registration.

    release() is idempotent and only ever removes the registration this handle
    was created for. Use it as a context manager to scope a subscription:

        with bus.subscribe(TASKS_UPDATED, render):
            ...
    """

    def __init__(self, bus: NotificationBus, event_name: str, registration: _Registration) -> None:
        self._bus = bus
        self.event_name = event_name
        self._registration = registration
        self._released = False

    @property
    def callback(self) -> Subscriber:
        return self._registration.callback

    @property
    def active(self) -> bool:
        return not self._released and self._bus._is_registered(self.event_name, self._registration)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._bus._remove_registration(self.event_name, self._registration)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class NotificationBus:
    """Named-event publish/subscribe registry (synchronous, in-process)."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Registration]] = {}

    def subscribe(self, event_name: str, callback: Subscriber) -> Subscription:
        if not callable(callback):
            raise TypeError("callback must be callable")
        # The same callback may be registered more than once.
        registration = _Registration(callback)
        self._subscribers.setdefault(event_name, []).append(registration)
        return Subscription(self, event_name, registration)

    def unsubscribe(self, event_name: str, callback: Subscriber) -> int:
        """Remove every registration of callback under event_name. Returns how many."""
        registrations = self._subscribers.get(event_name)
        if not registrations:
            return 0
        kept = [r for r in registrations if r.callback is not callback]
        removed = len(registrations) - len(kept)
        if kept:
            self._subscribers[event_name] = kept
        else:
            del self._subscribers[event_name]
        return removed

    def publish(self, event_name: str, payload: Any = None) -> int:
        """
        Call every callback registered for event_name, in registration order.

        A failing callback is logged and skipped; the others still run.
        Returns the number of callbacks that raised.
        """
        # Snapshot: callbacks may (un)subscribe while we iterate.
        callbacks = [r.callback for r in self._subscribers.get(event_name, ())]
        failures = 0
        for callback in callbacks:
            try:
                callback(payload)
            except Exception:
                failures += 1
                logger.exception("Subscriber %r crashed on event=%s", callback, event_name)
        return failures

    notify = publish

    def subscriber_count(self, event_name: str) -> int:
        return len(self._subscribers.get(event_name, ()))

    def _is_registered(self, event_name: str, registration: _Registration) -> bool:
        return any(r is registration for r in self._subscribers.get(event_name, ()))

    def _remove_registration(self, event_name: str, registration: _Registration) -> None:
        registrations = self._subscribers.get(event_name)
        if not registrations:
            return
        for i, r in enumerate(registrations):
            if r is registration:
                del registrations[i]
                break
        if not registrations:
            del self._subscribers[event_name]
