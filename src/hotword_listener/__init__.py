"""
hotword-listener - microphone hotword detection behind a small event API.

Example usage:
    from hotword_listener import EventType, HotwordListener

    def on_hotword(event):
        print(f"Detected: {event.hotword} (model {event.index})")

    listener = HotwordListener(models=[{"file": "hey_jarvis", "hotwords": "hey jarvis"}])
    listener.on(EventType.HOTWORD, on_hotword)
    listener.start()
"""

from .config import (
    DEFAULT_DETECTOR,
    DEFAULT_MODEL,
    DetectorConfig,
    ModelSpec,
    RecorderConfig,
)
from .core import (
    ErrorEvent,
    EventType,
    HotwordEvent,
    SilenceEvent,
    SoundEvent,
)
from .listener import HotwordListener, ListenerState

__all__ = [
    "HotwordListener",
    "ListenerState",
    "ModelSpec",
    "DetectorConfig",
    "RecorderConfig",
    "DEFAULT_MODEL",
    "DEFAULT_DETECTOR",
    "EventType",
    "HotwordEvent",
    "SoundEvent",
    "SilenceEvent",
    "ErrorEvent",
]
__version__ = "0.1.0"
