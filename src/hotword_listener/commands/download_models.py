"""Download pre-trained hotword models."""


def main() -> bool:
    """Download openWakeWord pre-trained models using its built-in utility.

    Returns:
        True if successful, False otherwise
    """
    print("Downloading Hotword Models")
    print("=" * 60)
    print("This may take a few minutes depending on your internet connection.")
    print()

    try:
        import openwakeword
        from openwakeword.utils import download_models

        download_models()

        print("✓ Models downloaded successfully")
        print()
        print("Available models:")
        for path in openwakeword.get_pretrained_model_paths():
            model_name = path.split("/")[-1].rsplit(".", 1)[0].replace("_v0.1", "")
            print(f"  • {model_name}")
        print()
        print("=" * 60)
        print("✓ Models ready to use")
        print("=" * 60)
        return True

    except Exception as e:
        print(f"✗ Failed to download models: {e}")
        print()
        print("Troubleshooting:")
        print("  1. Check internet connection")
        print("  2. Check openWakeWord documentation: https://github.com/dscripka/openWakeWord")
        print("=" * 60)
        return False
