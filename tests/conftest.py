"""Shared fixtures: fake detector and recorder collaborators for the listener."""

import pytest

from hotword_listener import listener as listener_module
from hotword_listener.core.audio_recorder import AudioStream
from hotword_listener.core.event_bus import EventBus


class FakeDetector:
    """Stands in for HotwordDetector; signals are raised with emit()."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.events = EventBus()
        self.chunks = []
        self.reset_calls = 0
        FakeDetector.instances.append(self)

    def on(self, event_type, callback):
        self.events.subscribe(event_type, callback)

    def off(self, event_type, callback):
        self.events.unsubscribe(event_type, callback)

    def write(self, chunk):
        self.chunks.append(chunk)

    def reset(self):
        self.reset_calls += 1
        self.events.clear()

    def emit(self, event_type, event):
        self.events.publish(event_type, event)


class FakeRecorder:
    """Stands in for AudioRecorder; records lifecycle calls."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.calls = []
        self._stream = None
        FakeRecorder.instances.append(self)

    def start(self):
        self.calls.append("start")
        self._stream = AudioStream()
        return self

    def stop(self):
        self.calls.append("stop")
        if self._stream is not None:
            self._stream.close()
        self._stream = None
        return self

    def pause(self):
        self.calls.append("pause")
        return self

    def resume(self):
        self.calls.append("resume")
        return self

    def stream(self):
        return self._stream


@pytest.fixture
def fakes(monkeypatch):
    """Replace the listener's detector and recorder with fakes."""
    FakeDetector.instances = []
    FakeRecorder.instances = []
    monkeypatch.setattr(listener_module, "HotwordDetector", FakeDetector)
    monkeypatch.setattr(listener_module, "AudioRecorder", FakeRecorder)
    return FakeDetector, FakeRecorder
