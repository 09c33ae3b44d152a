"""Core components - audio capture, event bus, hotword detection."""

from .audio_recorder import AudioRecorder, AudioStream
from .event_bus import (
    ErrorEvent,
    EventBus,
    EventType,
    HotwordEvent,
    SilenceEvent,
    SoundEvent,
)
from .hotword_detector import HotwordDetector

__all__ = [
    "AudioRecorder",
    "AudioStream",
    "EventBus",
    "EventType",
    "HotwordEvent",
    "SoundEvent",
    "SilenceEvent",
    "ErrorEvent",
    "HotwordDetector",
]
