"""Hotword detection using openWakeWord, with WebRTC VAD for sound/silence."""

import logging
import os
from typing import Any, Callable, List

import numpy as np

from ..config import DetectorConfig
from .event_bus import (
    ErrorEvent,
    EventBus,
    EventType,
    HotwordEvent,
    SilenceEvent,
    SoundEvent,
)

logger = logging.getLogger(__name__)

# WebRTC VAD only accepts 10, 20 or 30ms frames
VAD_FRAME_MS = 20


def _load_model(config: DetectorConfig):
    """Load the openWakeWord model for the configured model files."""
    from openwakeword.model import Model

    kwargs: dict[str, Any] = {"inference_framework": config.inference_framework}
    if config.resource:
        ext = "tflite" if config.inference_framework == "tflite" else "onnx"
        kwargs["melspec_model_path"] = os.path.join(config.resource, f"melspectrogram.{ext}")
        kwargs["embedding_model_path"] = os.path.join(config.resource, f"embedding_model.{ext}")

    return Model(wakeword_models=[spec.file for spec in config.models], **kwargs)


def _create_vad(aggressiveness: int):
    """Create a WebRTC voice activity detector."""
    import webrtcvad

    return webrtcvad.Vad(aggressiveness)


class HotwordDetector:
    """Streaming hotword detector.

    Consumes PCM16 mono audio through write() and raises HOTWORD, SOUND,
    SILENCE and ERROR signals. An instance is single-use: once reset() has
    been called it ignores further audio and has no listeners.
    """

    def __init__(self, config: DetectorConfig):
        """Initialize hotword detector.

        Args:
            config: Detector configuration with a non-empty model collection
        """
        if not config.models:
            raise ValueError("HotwordDetector requires at least one model")

        self.config = config
        self._events = EventBus()
        self._buffer = bytearray()
        self._frame_bytes = config.chunk_size * 2  # 16-bit samples
        self._in_silence = False
        self._cooldown_frames = int(config.hotword_cooldown * config.sample_rate / config.chunk_size)
        self._cooldown_remaining = 0
        self._disposed = False

        try:
            self._model = _load_model(config)
        except Exception as e:
            logger.error(f"Failed to load hotword models: {e}")
            raise

        self._vad = _create_vad(config.vad_aggressiveness)
        self._model_names: List[str] = list(self._model.models.keys())

        logger.info(
            f"HotwordDetector initialized: models={self._model_names}, "
            f"sensitivities={[spec.sensitivity for spec in config.models]}"
        )

    @property
    def active_models(self) -> List[str]:
        """Return the names of the loaded models."""
        return self._model_names.copy()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on(self, event_type: EventType, callback: Callable[[Any], None]):
        """Register a callback for a detector signal."""
        self._events.subscribe(event_type, callback)

    def off(self, event_type: EventType, callback: Callable[[Any], None]):
        """Remove a callback for a detector signal."""
        self._events.unsubscribe(event_type, callback)

    def remove_all_listeners(self):
        self._events.clear()

    def write(self, chunk: bytes):
        """Feed raw audio into the detector.

        Audio is buffered until a full frame of chunk_size samples is
        available; every complete frame is scored.

        Args:
            chunk: PCM16 mono audio data
        """
        if self._disposed:
            return

        self._buffer.extend(chunk)
        while len(self._buffer) >= self._frame_bytes and not self._disposed:
            frame = bytes(self._buffer[: self._frame_bytes])
            del self._buffer[: self._frame_bytes]
            self._process_frame(frame)

    def _process_frame(self, frame: bytes):
        try:
            audio = np.frombuffer(frame, dtype=np.int16)
            if self.config.audio_gain != 1.0:
                audio = np.clip(
                    audio.astype(np.float32) * self.config.audio_gain, -32768, 32767
                ).astype(np.int16)

            predictions = self._model.predict(audio)
            speech = self._is_speech(audio.tobytes())
        except Exception as e:
            logger.error(f"Error in hotword detection: {e}")
            self._events.publish(EventType.ERROR, ErrorEvent(message=str(e)))
            return

        if self._cooldown_remaining > 0:
            self._cooldown_remaining -= 1
        else:
            for index, (name, spec) in enumerate(zip(self._model_names, self.config.models)):
                score = float(predictions.get(name, 0.0))
                if score >= spec.sensitivity:
                    logger.info(f"Hotword '{spec.hotwords[0]}' detected! Score: {score:.3f}")
                    self._in_silence = False
                    self._cooldown_remaining = self._cooldown_frames
                    self._model.reset()
                    self._events.publish(
                        EventType.HOTWORD,
                        HotwordEvent(index=index, hotword=spec.hotwords[0], buffer=frame),
                    )
                    return

        if speech:
            self._in_silence = False
            self._events.publish(EventType.SOUND, SoundEvent(buffer=frame))
        elif not self._in_silence:
            self._in_silence = True
            self._events.publish(EventType.SILENCE, SilenceEvent())

    def _is_speech(self, pcm16_data: bytes) -> bool:
        """Check if audio frame contains speech using VAD.

        The frame is split into 20ms sub-frames; any voiced sub-frame
        counts as speech.
        """
        frame_size = int(self.config.sample_rate * VAD_FRAME_MS / 1000) * 2
        for i in range(0, len(pcm16_data), frame_size):
            sub_frame = pcm16_data[i : i + frame_size]
            if len(sub_frame) == frame_size:
                if self._vad.is_speech(sub_frame, self.config.sample_rate):
                    return True
        return False

    def reset(self):
        """Dispose the detector: drop buffered audio, model state and listeners."""
        if self._disposed:
            return
        self._disposed = True
        self._buffer.clear()
        self._events.clear()
        try:
            self._model.reset()
        except Exception as e:
            logger.error(f"Error resetting hotword detector: {e}")
        logger.debug("Hotword detector reset")
