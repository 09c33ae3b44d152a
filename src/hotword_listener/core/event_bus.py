"""Event bus for hotword listener signals - publish/subscribe pattern."""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Signals raised by the detector and re-emitted by the listener."""

    HOTWORD = "hotword"
    SOUND = "sound"
    SILENCE = "silence"
    ERROR = "error"


@dataclass(frozen=True)
class HotwordEvent:
    """Event emitted when a hotword is detected."""

    index: int  # Position of the model in the model collection
    hotword: str
    buffer: bytes  # Audio frame at the detection instant


@dataclass(frozen=True)
class SoundEvent:
    """Event emitted for a voiced audio frame."""

    buffer: bytes


@dataclass(frozen=True)
class SilenceEvent:
    """Event emitted when the audio enters a silence region."""


@dataclass(frozen=True)
class ErrorEvent:
    """Event emitted when detection fails."""

    message: str


class EventBus:
    """Simple event bus for pub-sub communication between components.

    Subscribers are called synchronously in the publishing thread, in the
    order they subscribed.
    """

    def __init__(self):
        """Initialize event bus."""
        self._subscribers: Dict[EventType, List[Callable]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: EventType, callback: Callable[[Any], None]):
        """Subscribe to an event type.

        Args:
            event_type: Type of event to subscribe to (e.g., EventType.HOTWORD)
            callback: Function to call when event is published
        """
        event_type = EventType(event_type)
        with self._lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = []

            self._subscribers[event_type].append(callback)
            logger.debug(
                f"Subscribed to '{event_type.value}' "
                f"(total subscribers: {len(self._subscribers[event_type])})"
            )

    def unsubscribe(self, event_type: EventType, callback: Callable[[Any], None]):
        """Unsubscribe from an event type.

        Args:
            event_type: Type of event to unsubscribe from
            callback: Callback function to remove
        """
        event_type = EventType(event_type)
        with self._lock:
            if event_type in self._subscribers:
                try:
                    self._subscribers[event_type].remove(callback)
                    logger.debug(f"Unsubscribed from '{event_type.value}'")
                except ValueError:
                    pass

    def clear(self):
        """Remove all subscribers."""
        with self._lock:
            self._subscribers.clear()

    def publish(self, event_type: EventType, event_data: Any):
        """Publish an event to all subscribers.

        Args:
            event_type: Type of event to publish
            event_data: Event data to pass to subscribers
        """
        event_type = EventType(event_type)
        with self._lock:
            subscribers = self._subscribers.get(event_type, []).copy()

        if not subscribers:
            return

        for callback in subscribers:
            self._safe_callback(callback, event_data, event_type)

    def _safe_callback(self, callback: Callable, event_data: Any, event_type: EventType):
        """Call subscriber callback with error handling.

        Args:
            callback: Subscriber callback function
            event_data: Event data
            event_type: Event type (for logging)
        """
        try:
            callback(event_data)
        except Exception as e:
            logger.error(
                f"Error in subscriber callback for '{event_type.value}': {e}", exc_info=True
            )

    def get_subscriber_count(self, event_type: EventType) -> int:
        """Get number of subscribers for an event type.

        Args:
            event_type: Event type to check

        Returns:
            Number of subscribers
        """
        with self._lock:
            return len(self._subscribers.get(EventType(event_type), []))
