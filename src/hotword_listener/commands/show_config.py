"""Display current configuration."""

from hotword_listener.config import Config, resolve_detector_config, resolve_models


def main(config_path: str = "config/config.yaml") -> bool:
    """Display the resolved listener configuration.

    Returns:
        True if successful, False otherwise
    """
    try:
        config = Config(config_path)
        models = resolve_models(config.models)
        detector = resolve_detector_config(config.detector_options, models)

        print("Current Configuration")
        print("=" * 60)
        print(f"Recording Program: {config.recording_program}")
        print(f"Recording Device: {config.recorder_device or 'default'}")
        print(f"Log Level: {config.log_level}")
        print(f"Detector Resource: {detector.resource or 'openWakeWord bundled'}")
        print(f"Inference Framework: {detector.inference_framework}")
        print(f"Audio Gain: {detector.audio_gain}")
        print(f"VAD Aggressiveness: {detector.vad_aggressiveness}")
        print(f"Hotword Cooldown: {detector.hotword_cooldown}s")
        print("Models:")
        for index, spec in enumerate(models):
            print(
                f"  {index}. {spec.file} -> {', '.join(spec.hotwords)} "
                f"(sensitivity {spec.sensitivity})"
            )
        print("=" * 60)
        return True

    except Exception as e:
        print(f"Error loading configuration: {e}")
        return False
