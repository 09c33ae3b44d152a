"""Configuration for the hotword listener: model, detector and recorder settings."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 16000
DEFAULT_RECORDING_PROGRAM = "rec"


@dataclass(frozen=True)
class ModelSpec:
    """A wake word model and the keyword label(s) it triggers."""

    file: str
    hotwords: tuple[str, ...] = ()
    sensitivity: float = 0.5

    def __post_init__(self):
        hotwords = self.hotwords
        if isinstance(hotwords, str):
            hotwords = (hotwords,)
        elif not hotwords:
            hotwords = (Path(self.file).stem,)
        object.__setattr__(self, "hotwords", tuple(hotwords))


@dataclass(frozen=True)
class DetectorConfig:
    """Settings used to build a fresh HotwordDetector on every start/resume."""

    resource: Optional[str] = None  # Directory with melspectrogram/embedding models
    inference_framework: str = "onnx"
    audio_gain: float = 1.0
    vad_aggressiveness: int = 2
    sample_rate: int = DEFAULT_SAMPLE_RATE
    chunk_size: int = 1280  # 80ms at 16kHz (required by openWakeWord)
    hotword_cooldown: float = 2.0
    models: tuple[ModelSpec, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RecorderConfig:
    """Capture parameters for the external recording program."""

    program: str = DEFAULT_RECORDING_PROGRAM
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = 1
    bits: int = 16
    threshold: float = 0  # 0 disables silence trimming in the recorder
    silence: float = 2.0
    device: Optional[str] = None
    chunk_bytes: int = 4096


DEFAULT_MODEL = ModelSpec(file="alexa", hotwords=("alexa",), sensitivity=0.5)
DEFAULT_DETECTOR = DetectorConfig()

ModelData = Union[ModelSpec, Mapping[str, Any]]


def resolve_model(data: ModelData) -> ModelSpec:
    """Merge a single model definition over the default model.

    Args:
        data: ModelSpec or mapping of ModelSpec fields

    Returns:
        New ModelSpec; the default template is left untouched
    """
    if isinstance(data, ModelSpec):
        return data
    return replace(DEFAULT_MODEL, **dict(data))


def resolve_models(models: Optional[Sequence[ModelData]]) -> tuple[ModelSpec, ...]:
    """Resolve the model collection, falling back to the built-in default model.

    Args:
        models: Model definitions (possibly empty or None)

    Returns:
        Tuple of independent ModelSpec instances, never empty
    """
    if not models:
        return (DEFAULT_MODEL,)
    return tuple(resolve_model(m) for m in models)


def resolve_detector_config(
    overrides: Union[DetectorConfig, Mapping[str, Any], None],
    models: Sequence[ModelSpec],
) -> DetectorConfig:
    """Merge detector overrides over the defaults and attach the models.

    Args:
        overrides: DetectorConfig, mapping of DetectorConfig fields, or None
        models: Resolved model collection

    Returns:
        New DetectorConfig

    Raises:
        TypeError: If overrides contain unknown fields
    """
    if overrides is None:
        base = DEFAULT_DETECTOR
    elif isinstance(overrides, DetectorConfig):
        base = overrides
    else:
        options = dict(overrides)
        options.pop("models", None)
        base = replace(DEFAULT_DETECTOR, **options)
    return replace(base, models=tuple(models))


class Config:
    """YAML configuration for the listener commands."""

    def __init__(self, config_path: str = "config/config.yaml"):
        """Initialize configuration from YAML file.

        Args:
            config_path: Path to the configuration YAML file
        """
        self.config_path = Path(config_path)
        self.config: dict[str, Any] = {}
        self.load()

    def load(self):
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                "Please create it from config/config.example.yaml."
            )

        with open(self.config_path, "r") as f:
            self.config = yaml.safe_load(f) or {}

        logger.info(f"Configuration loaded from {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation, e.g., 'recorder.program')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def models(self) -> list[dict[str, Any]]:
        """Get model definitions."""
        return self.get("listener.models", []) or []

    @property
    def detector_options(self) -> dict[str, Any]:
        """Get detector overrides."""
        return self.get("detector", {}) or {}

    @property
    def recording_program(self) -> str:
        """Get the capture program name."""
        return self.get("recorder.program", DEFAULT_RECORDING_PROGRAM)

    @property
    def recorder_device(self) -> str | None:
        """Get the capture device (None for the program's default)."""
        return self.get("recorder.device", None)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")


def load_config(config_path: str = "config/config.yaml") -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to configuration file

    Returns:
        Config instance
    """
    return Config(config_path)
