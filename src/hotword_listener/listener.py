"""Hotword listener - lifecycle facade over audio capture and hotword detection."""

import logging
from enum import Enum, auto
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .config import (
    DEFAULT_RECORDING_PROGRAM,
    DEFAULT_SAMPLE_RATE,
    DetectorConfig,
    ModelData,
    RecorderConfig,
    resolve_detector_config,
    resolve_models,
)
from .core.audio_recorder import AudioRecorder
from .core.event_bus import ErrorEvent, EventBus, EventType, HotwordEvent
from .core.hotword_detector import HotwordDetector

DETECTOR_ERROR_MESSAGE = "HotwordListener: Detector error."


class ListenerState(Enum):
    """Hotword listener states."""

    IDLE = auto()  # Constructed, never started
    LISTENING = auto()  # Capture piped into a live detector
    PAUSED = auto()  # Capture suspended, detector disconnected
    STOPPED = auto()  # Capture torn down, detector disconnected


class HotwordListener:
    """Listens to the microphone and emits hotword, sound, silence and error events.

    Audio from the recording program is piped into a HotwordDetector. The
    detector is rebuilt on every start()/resume(): once its stream has been
    disconnected it is disposed and never wired again. Only one detector is
    connected at a time, and signals from a disconnected detector never
    reach subscribers of the listener.

    Lifecycle calls that do not apply to the current state (stop() before
    start(), start() while listening, ...) are no-ops that log a warning.
    """

    def __init__(
        self,
        models: Optional[Sequence[ModelData]] = None,
        detector_options: Union[DetectorConfig, Mapping[str, Any], None] = None,
        recording_program: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        device: Optional[str] = None,
    ):
        """Initialize hotword listener.

        Args:
            models: Model definitions (ModelSpec or mappings); the default model when empty
            detector_options: Overrides for the detector configuration
            recording_program: Capture program ('rec', 'sox' or 'arecord')
            logger: Optional logger receiving lifecycle and detection messages
            device: Optional capture device passed to the recording program
        """
        self.logger = logger

        self.models = resolve_models(models)
        self.detector_config = resolve_detector_config(detector_options, self.models)
        self.recorder_config = RecorderConfig(
            program=recording_program or DEFAULT_RECORDING_PROGRAM,
            sample_rate=DEFAULT_SAMPLE_RATE,
            threshold=0,
            device=device,
        )

        self._events = EventBus()
        self._state = ListenerState.IDLE
        self._detector: Optional[HotwordDetector] = None
        self._forwarders: dict[EventType, Callable[[Any], None]] = {
            EventType.ERROR: self._forward_error,
            EventType.HOTWORD: self._forward_hotword,
            EventType.SILENCE: self._forward_silence,
            EventType.SOUND: self._forward_sound,
        }
        self._recorder = AudioRecorder(self.recorder_config)

        self._log("HotwordListener initialized.")

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def detector(self) -> Optional[HotwordDetector]:
        """The detector created by the last start()/resume(), if any."""
        return self._detector

    def on(self, event_type: EventType, callback: Callable[[Any], None]) -> "HotwordListener":
        """Subscribe to a listener event.

        Args:
            event_type: EventType (or its string value, e.g. 'hotword')
            callback: Called with the event dataclass

        Returns:
            The listener itself
        """
        self._events.subscribe(event_type, callback)
        return self

    def off(self, event_type: EventType, callback: Callable[[Any], None]) -> "HotwordListener":
        """Unsubscribe from a listener event."""
        self._events.unsubscribe(event_type, callback)
        return self

    def start(self) -> "HotwordListener":
        """Start detection.

        Returns:
            The listener itself
        """
        if self._state is ListenerState.LISTENING:
            self._warn("HotwordListener: Already detecting, start ignored.")
            return self
        if self._state is ListenerState.PAUSED:
            return self.resume()

        detector = self._setup_detector()
        self._recorder.start().stream().pipe(detector)
        self._state = ListenerState.LISTENING

        self._log("HotwordListener: Started detecting.")
        return self

    def stop(self) -> "HotwordListener":
        """Stop detection and the recording program.

        Returns:
            The listener itself
        """
        if self._state not in (ListenerState.LISTENING, ListenerState.PAUSED):
            self._warn("HotwordListener: Not detecting, stop ignored.")
            return self

        self._disconnect()
        self._recorder.stop()
        self._state = ListenerState.STOPPED

        self._log("HotwordListener: Stopped detecting.")
        return self

    def pause(self) -> "HotwordListener":
        """Pause detection, keeping the recording program suspended.

        Returns:
            The listener itself
        """
        if self._state is not ListenerState.LISTENING:
            self._warn("HotwordListener: Not detecting, pause ignored.")
            return self

        self._disconnect()
        self._recorder.pause()
        self._state = ListenerState.PAUSED

        self._log("HotwordListener: Paused detecting.")
        return self

    def resume(self) -> "HotwordListener":
        """Resume detection with a fresh detector.

        Returns:
            The listener itself
        """
        if self._state is ListenerState.LISTENING:
            self._warn("HotwordListener: Already detecting, resume ignored.")
            return self
        if self._state is not ListenerState.PAUSED:
            return self.start()

        detector = self._setup_detector()
        self._recorder.resume().stream().pipe(detector)
        self._state = ListenerState.LISTENING

        self._log("HotwordListener: Resumed detecting.")
        return self

    def close(self):
        """Stop detection and dispose the detector."""
        if self._state in (ListenerState.LISTENING, ListenerState.PAUSED):
            self.stop()
        self._dispose_detector()

    def __enter__(self) -> "HotwordListener":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _setup_detector(self) -> HotwordDetector:
        """Dispose the previous detector and wire a new one.

        The detector has to be recreated on every start/resume since its
        stream connection cannot be re-established once severed.
        """
        self._dispose_detector()

        detector = HotwordDetector(self.detector_config)
        for event_type, forwarder in self._forwarders.items():
            detector.on(event_type, forwarder)
        self._detector = detector
        return detector

    def _disconnect(self):
        """Unpipe the capture stream and detach the forwarders from the detector."""
        if self._detector is None:
            return
        stream = self._recorder.stream()
        if stream is not None:
            stream.unpipe(self._detector)
        for event_type, forwarder in self._forwarders.items():
            self._detector.off(event_type, forwarder)

    def _dispose_detector(self):
        if self._detector is None:
            return
        self._disconnect()
        self._detector.reset()
        self._detector = None

    def _forward_error(self, event: ErrorEvent):
        self._warn(f"{DETECTOR_ERROR_MESSAGE} ({event.message})")
        self._events.publish(EventType.ERROR, ErrorEvent(message=DETECTOR_ERROR_MESSAGE))

    def _forward_hotword(self, event: HotwordEvent):
        self._log(
            f"HotwordListener: Hotword detected; index: {event.index}; hotword: {event.hotword}."
        )
        self._events.publish(EventType.HOTWORD, event)

    def _forward_silence(self, event):
        self._events.publish(EventType.SILENCE, event)

    def _forward_sound(self, event):
        self._events.publish(EventType.SOUND, event)

    def _log(self, message: str):
        if self.logger is not None:
            self.logger.info(message)

    def _warn(self, message: str):
        if self.logger is not None:
            self.logger.warning(message)
