# ballot_registry/events.py
"""In-process event log for election events."""

import logging
import threading
from typing import Callable, List

from .models.event_model import Event

logger = logging.getLogger(__name__)

Listener = Callable[[Event], None]


class EventLog:
    """Append-only history of emitted events with subscribe support."""

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def emit(self, event: Event) -> None:
        """
        Record an event and notify subscribers.
        A failing subscriber is logged and does not stop the others.
        """
        with self._lock:
            self._events.append(event)
            listeners = list(self._listeners)
        logger.info(f"Event {event.name}: {event.model_dump(exclude={'name', 'emitted_at'})}")
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on {event.name}: {e}")

    def truncate(self, length: int) -> None:
        """Drop history recorded after the first `length` events."""
        with self._lock:
            del self._events[length:]

    @property
    def events(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def filter(self, name: str) -> List[Event]:
        return [e for e in self.events if e.name == name]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
