"""
Process-wide publish/subscribe for progress notifications.

The recorder, matcher and rep counter announce what happens through the
bus; the console application and the ExerciseLogger listen.

    bus = EventBus()
    bus.subscribe(Events.STEP_MATCHED, on_step)
    bus.emit(Events.STEP_MATCHED, step=2, num_steps=5)
"""

import time
import logging
import threading
from collections import deque, namedtuple
from typing import Callable

logger = logging.getLogger(__name__)

HISTORY_SIZE = 100

_Subscription = namedtuple("_Subscription", ["priority", "order", "handler"])


class EventBus:
    """Singleton bus. Handlers run synchronously, highest priority first."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            bus = super().__new__(cls)
            bus._subscriptions = {}
            bus._guard = threading.Lock()
            bus._history = deque(maxlen=HISTORY_SIZE)
            bus._counter = 0
            cls._instance = bus
        return cls._instance

    def subscribe(self, event_name: str, handler: Callable, priority: int = 0):
        """Call ``handler(**payload)`` for every emit of ``event_name``.

        Equal priorities run in subscription order.
        """
        with self._guard:
            self._counter += 1
            entries = self._subscriptions.setdefault(event_name, [])
            entries.append(_Subscription(priority, self._counter, handler))
            entries.sort(key=lambda s: (-s.priority, s.order))
        logger.debug("%s subscribed to %s", getattr(handler, "__name__", handler), event_name)

    def unsubscribe(self, event_name: str, handler: Callable):
        with self._guard:
            entries = self._subscriptions.get(event_name, [])
            self._subscriptions[event_name] = [s for s in entries if s.handler is not handler]

    def emit(self, event_name: str, **payload):
        """Record the event and deliver it.

        A handler that raises is logged and skipped; the emitter never sees
        the exception.
        """
        with self._guard:
            handlers = [s.handler for s in self._subscriptions.get(event_name, ())]
            self._history.append({"event": event_name, "time": time.time(), "data": payload})

        for handler in handlers:
            try:
                handler(**payload)
            except Exception:
                logger.exception("Handler %s failed on %s",
                                 getattr(handler, "__name__", handler), event_name)

    def clear(self, event_name: str = None):
        """Drop the handlers of one event, or of every event."""
        with self._guard:
            if event_name is None:
                self._subscriptions.clear()
            else:
                self._subscriptions.pop(event_name, None)

    @property
    def listener_count(self) -> int:
        with self._guard:
            return sum(len(entries) for entries in self._subscriptions.values())

    def get_history(self, last_n: int = 10) -> list:
        """The most recent events, oldest first."""
        with self._guard:
            recent = list(self._history)
        return recent[-last_n:]

    def events_named(self, event_name: str) -> list:
        """Payloads of the retained events called ``event_name``, oldest first."""
        with self._guard:
            return [entry["data"] for entry in self._history if entry["event"] == event_name]

    def reset(self):
        """Drop all handlers and history (used by tests)."""
        with self._guard:
            self._subscriptions.clear()
            self._history.clear()


class Events:
    """Event names."""

    # Recording
    RECORDING_STARTED = "recording_started"
    SAMPLE_ACCEPTED = "sample_accepted"
    RECORDING_FINISHED = "recording_finished"
    GESTURE_SAVED = "gesture_saved"

    # Matching
    MATCH_STARTED = "match_started"
    STEP_MATCHED = "step_matched"
    STRIKE = "strike"
    MATCH_RESET = "match_reset"
    MATCH_COMPLETED = "match_completed"
    MATCH_ABORTED = "match_aborted"

    # Exercise sets
    REP_COMPLETED = "rep_completed"

    # Device
    SOURCE_LOST = "source_lost"
