"""Verify installation and dependencies."""

import shutil
import sys


def main(config_path: str = "config/config.yaml") -> bool:
    """Verify installation and dependencies.

    Returns:
        True if all checks pass, False otherwise
    """
    print("Verifying Hotword Listener Installation")
    print("=" * 60)
    print()

    all_checks_passed = True
    program = "rec"
    models = None
    detector_options = None

    # Check 1: Python version
    print("1. Python Version")
    python_version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    print(f"   Version: {python_version}")
    if sys.version_info >= (3, 11):
        print("   ✓ Python 3.11+ detected")
    else:
        print("   ✗ Python 3.11+ required")
        all_checks_passed = False
    print()

    # Check 2: Configuration
    print("2. Configuration")
    try:
        from hotword_listener.config import load_config

        config = load_config(config_path)
        program = config.recording_program
        models = config.models
        detector_options = config.detector_options
        print(f"   ✓ Configuration loaded from {config_path}")
    except FileNotFoundError:
        print(f"   - No configuration at {config_path}, using defaults")
    except Exception as e:
        print(f"   ✗ Configuration error: {e}")
        all_checks_passed = False
    print()

    # Check 3: Recording program
    print("3. Recording Program")
    path = shutil.which(program)
    if path:
        print(f"   ✓ Found '{program}' at {path}")
    else:
        print(f"   ✗ '{program}' not found on PATH")
        print("   Install sox (rec) or alsa-utils (arecord)")
        all_checks_passed = False
    print()

    # Check 4: Hotword models
    print("4. Hotword Models")
    try:
        from hotword_listener.config import resolve_detector_config, resolve_models
        from hotword_listener.core import HotwordDetector

        resolved = resolve_models(models)
        detector = HotwordDetector(resolve_detector_config(detector_options, resolved))
        print(f"   ✓ Models loaded: {', '.join(detector.active_models)}")
        detector.reset()
    except Exception as e:
        print(f"   ✗ Failed to load models: {e}")
        print("   Run: hotword-listener download-models")
        all_checks_passed = False
    print()

    # Summary
    print("=" * 60)
    if all_checks_passed:
        print("✓ All checks passed! Ready to use.")
        print()
        print("Next steps:")
        print("  hotword-listener listen    # Listen for hotwords")
    else:
        print("✗ Some checks failed. Please fix the issues above.")
    print("=" * 60)

    return all_checks_passed
