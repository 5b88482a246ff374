"""
Event bus for SPACEBREAK.

The window publishes input, the session publishes game flow and the app
listens for ticks and shutdown. Events are either emitted on the spot or
queued and flushed once per frame by the window loop.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional
from enum import Enum, auto
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types used by the game."""
    # Input
    POINTER_MOVE = auto()   # data: x, y in play field coordinates
    CONFIRM = auto()        # dialog OK
    CANCEL = auto()         # dialog Cancel

    # Game flow
    STATE_CHANGED = auto()  # data: old, new (GameState names)
    SCORE_CHANGED = auto()  # data: score, target
    GAME_WON = auto()
    GAME_LOST = auto()      # data: score, reason
    GAME_RESTART = auto()
    GAME_FINISHED = auto()

    # System
    TICK = auto()           # data: delta (seconds), frame
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    A message on the bus.

    Attributes:
        type: Event type (EventType member or custom string)
        data: Payload
        source: Who emitted it ("keyboard", "mouse", "session", ...)
        timestamp: Wall clock time of creation
    """
    type: EventType | str
    data: Dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Publish/subscribe hub.

    Handler errors are logged and never reach the emitter, so one broken
    listener cannot stop the frame loop. ``emit`` runs plain functions only;
    coroutine handlers run when queued events are flushed.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: Dict[EventType | str, List[Handler]] = {}
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._history: Deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` for one event type.

        Returns:
            Function that removes the subscription again
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event right now to its synchronous handlers."""
        self._history.append(event)
        for handler in self._handlers_for(event):
            if inspect.iscoroutinefunction(handler):
                logger.debug(f"Skipping async handler for {event.type}, queue the event instead")
                continue
            self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Hold an event until the next :meth:`process_queue`."""
        self._queue.put_nowait(event)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def process_queue(self) -> None:
        """Deliver every queued event to sync and async handlers, in order."""
        while not self._queue.empty():
            event = self._queue.get_nowait()
            self._history.append(event)

            coroutines = []
            for handler in self._handlers_for(event):
                if inspect.iscoroutinefunction(handler):
                    coroutines.append(handler(event))
                else:
                    self._call(handler, event)

            if coroutines:
                results = await asyncio.gather(*coroutines, return_exceptions=True)
                for result in results:
                    if isinstance(result, Exception):
                        logger.error(f"Error in async handler for {event.type}: {result}")

            self._queue.task_done()

    def _handlers_for(self, event: Event) -> List[Handler]:
        # Copy so handlers may (un)subscribe while being called
        return list(self._handlers.get(event.type, ()))

    @staticmethod
    def _call(handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error in event handler for {event.type}: {e}")

    def get_history(
        self,
        event_type: Optional[EventType | str] = None,
        limit: int = 10
    ) -> List[Event]:
        """Most recent events, oldest first, optionally of one type."""
        history = [e for e in self._history if event_type is None or e.type == event_type]
        return history[-limit:]


def pointer_move_event(x: float, y: float, source: str = "mouse") -> Event:
    """Pointer position in play field coordinates."""
    return Event(EventType.POINTER_MOVE, data={"x": x, "y": y}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
