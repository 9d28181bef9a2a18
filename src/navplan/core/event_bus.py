"""Event bus for synchronous notification of planning state changes.

Observers (a UI layer, the CLI, tests) subscribe to event types and are
called in priority order when an event is published. Publishing is safe from
worker threads; handlers run on the publishing thread.

Typical usage example:
    from navplan.core.event_bus import EventBus
    from navplan.planning.orchestrator import NavLogUpdatedEvent

    bus = EventBus()
    bus.subscribe(NavLogUpdatedEvent, lambda event: print(event.snapshot.state))
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventPriority(Enum):
    """Priority levels for event handlers, highest first."""

    CRITICAL = auto()
    HIGH = auto()
    NORMAL = auto()
    LOW = auto()


@dataclass(frozen=True)
class Event:
    """Base class for all events.

    Attributes:
        timestamp: Unix timestamp when the event was created.
    """

    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Any], None]


class EventBus:
    """Central event bus for synchronous event dispatch.

    Examples:
        >>> bus = EventBus()
        >>> received = []
        >>> bus.subscribe(Event, received.append)
        >>> bus.publish(Event())
        >>> len(received)
        1
    """

    def __init__(self) -> None:
        """Initialize an empty event bus."""
        self._handlers: dict[type[Event], list[tuple[Handler, EventPriority]]] = {}
        self._lock = threading.Lock()

    def subscribe(
        self,
        event_type: type[Event],
        handler: Handler,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> None:
        """Subscribe a handler to an event type.

        Args:
            event_type: The class of event to subscribe to.
            handler: Callable that accepts the event as its only parameter.
            priority: Priority level for this handler.
        """
        with self._lock:
            handlers = self._handlers.setdefault(event_type, [])
            handlers.append((handler, priority))
            handlers.sort(key=lambda entry: entry[1].value)

    def unsubscribe(self, event_type: type[Event], handler: Handler) -> None:
        """Unsubscribe a handler. Unknown handlers are ignored."""
        with self._lock:
            if event_type not in self._handlers:
                return
            remaining = [(h, p) for h, p in self._handlers[event_type] if h != handler]
            if remaining:
                self._handlers[event_type] = remaining
            else:
                del self._handlers[event_type]

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers of its exact type.

        Handler exceptions propagate to the publisher.

        Args:
            event: The event to publish.
        """
        with self._lock:
            handlers = list(self._handlers.get(type(event), ()))

        for handler, _ in handlers:
            handler(event)

    def clear(self) -> None:
        """Remove all event handlers."""
        with self._lock:
            self._handlers.clear()
