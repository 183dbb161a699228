"""
Event bus system for the game.

Input arrives asynchronously relative to the frame tick. Producers call
queue_event(); the frame driver drains the queue once per tick, before
the simulation step, so input is always applied between ticks.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
from collections import defaultdict
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events (zero payload)
    FLAP = auto()
    START_REQUESTED = auto()
    RESTART_REQUESTED = auto()

    # Presentation events
    VIEWPORT_RESIZED = auto()  # data: width, height

    # Session events
    STATE_CHANGED = auto()     # data: old, new
    SCORE_CHANGED = auto()     # data: score
    NEW_BEST_SCORE = auto()    # data: best_score

    # System events
    TICK = auto()  # Frame tick
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


# Type aliases for handlers
SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Central event bus for component communication.

    Supports both synchronous and asynchronous handlers.
    Events can be emitted immediately or queued for batch processing.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function (sync or async)

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to all events. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """
        Emit an event immediately (synchronous handlers only).

        For async handlers, use queue_event and process_queue.
        """
        self._add_to_history(event)
        self._dispatch_sync(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next drain."""
        self._queue.put_nowait(event)

    @property
    def pending(self) -> int:
        """Number of queued events not yet dispatched."""
        return self._queue.qsize()

    async def process_queue(self) -> int:
        """Dispatch all queued events in arrival order.

        Returns:
            Number of events dispatched
        """
        count = 0
        while not self._queue.empty():
            event = self._queue.get_nowait()
            self._add_to_history(event)
            await self._dispatch_async(event)
            self._queue.task_done()
            count += 1
        return count

    def _handlers_for(self, event: Event) -> list[Handler]:
        return list(self._handlers.get(event.type, [])) + list(self._global_handlers)

    def _dispatch_sync(self, event: Event) -> None:
        """Dispatch event to synchronous handlers only."""
        for handler in self._handlers_for(event):
            if inspect.iscoroutinefunction(handler):
                continue  # Skip async handlers
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    async def _dispatch_async(self, event: Event) -> None:
        """Dispatch event to all handlers (sync and async)."""
        tasks = []
        for handler in self._handlers_for(event):
            if inspect.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Error in sync handler: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler: {result}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Convenience functions for creating common events
def flap_event(source: str = "input") -> Event:
    """Create a flap event (key press or pointer activation)."""
    return Event(EventType.FLAP, source=source)


def start_event(source: str = "input") -> Event:
    """Create a start request event."""
    return Event(EventType.START_REQUESTED, source=source)


def restart_event(source: str = "input") -> Event:
    """Create a restart request event."""
    return Event(EventType.RESTART_REQUESTED, source=source)


def resize_event(width: int, height: int, source: str = "window") -> Event:
    """Create a viewport resize event."""
    return Event(
        EventType.VIEWPORT_RESIZED,
        data={"width": width, "height": height},
        source=source,
    )


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
