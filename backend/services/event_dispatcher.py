"""
Event Dispatcher

Routes drained domain events to handlers registered per event type.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

from domain.events import DomainEvent
from services.interfaces import EventSink

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventDispatcher(EventSink):
    """
    EventSink backed by a registry of ``event_type -> [handlers]``.

    Handlers run synchronously in registration order. A failing handler is
    logged and skipped; the remaining handlers still run.
    """

    def __init__(self, handlers: Optional[Dict[str, List[EventHandler]]] = None):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        for event_type, registered in (handlers or {}).items():
            self._handlers[event_type].extend(registered)

    def register(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: str) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def publish(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            for handler in self.handlers_for(event.event_type):
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        f"Event handler {getattr(handler, '__name__', handler)!r} failed "
                        f"for {event.event_type}: {e}",
                        exc_info=True
                    )


class RecordingEventSink(EventSink):
    """Keeps published events in memory, in order."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def publish(self, events: Iterable[DomainEvent]) -> None:
        self.events.extend(events)

    def of_type(self, event_type: str) -> List[DomainEvent]:
        return [event for event in self.events if event.event_type == event_type]

    def clear(self) -> None:
        self.events.clear()


def log_event(event: DomainEvent) -> None:
    """Default handler: write the event to the application log."""
    logger.info(f"Domain event {event.event_type}: {event.to_dict()}")
