"""
Event sink and listener fan-out.

The sync layer only needs something with an ``emit`` method. EventBus is
the implementation used by the service: it fans events out to registered
listeners and can hold them back while a batch is open.
"""
import logging
from collections import deque
from contextlib import contextmanager
from typing import Callable, Deque, Iterator, List, Protocol

from .types import DeviceEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[DeviceEvent], None]


class EventSink(Protocol):
    """Fire-and-forget consumer of device events."""

    def emit(self, event: DeviceEvent) -> None:
        ...


class EventBus:
    """
    Delivers device events to listeners.

    Features:
    - Listener registration and removal
    - Batching (events queued until the batch closes)
    - Bounded history of recently emitted events
    """

    def __init__(self, history_size: int = 100):
        """
        Initialize the event bus.

        Args:
            history_size: Number of recent events to keep.
        """
        self._listeners: List[EventListener] = []
        self._queue: List[DeviceEvent] = []
        self._batch_depth = 0
        self.history: Deque[DeviceEvent] = deque(maxlen=history_size)

    def add_listener(self, listener: EventListener) -> None:
        """Register a listener."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @property
    def is_batching(self) -> bool:
        return self._batch_depth > 0

    def emit(self, event: DeviceEvent) -> None:
        """
        Emit an event.

        Args:
            event: Event to deliver.
        """
        self.history.append(event)
        if self.is_batching:
            self._queue.append(event)
            return
        self._deliver(event)

    @contextmanager
    def batch(self) -> Iterator["EventBus"]:
        """
        Hold events back until the outermost batch closes.

        Usage:
            with bus.batch():
                bus.emit(a)
                bus.emit(b)   # a and b delivered here, in order
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                events, self._queue = self._queue, []
                for event in events:
                    self._deliver(event)

    def _deliver(self, event: DeviceEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Error in event listener for {event.type}: {e}")
