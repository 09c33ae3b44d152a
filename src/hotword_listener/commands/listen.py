"""Listen for hotwords and print listener events in real-time."""

import logging
import signal
import threading
from typing import Optional

from hotword_listener.config import Config
from hotword_listener.core import EventType, HotwordEvent
from hotword_listener.listener import HotwordListener

logger = logging.getLogger(__name__)


def main(
    config_path: str = "config/config.yaml",
    log_level: Optional[str] = None,
    program: Optional[str] = None,
    show_sound: bool = False,
) -> bool:
    """Run the hotword listener until interrupted.

    Args:
        config_path: Path to configuration file (defaults are used if missing)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR); overrides config
        program: Recording program; overrides config
        show_sound: Also print sound/silence events

    Returns:
        True if successful, False otherwise
    """
    config: Optional[Config] = None
    try:
        config = Config(config_path)
    except FileNotFoundError as e:
        print(f"{e}\nUsing built-in defaults.")
    except Exception as e:
        print(f"Failed to load configuration: {e}")
        return False

    level = log_level or (config.log_level if config else "INFO")
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        listener = HotwordListener(
            models=config.models if config else None,
            detector_options=config.detector_options if config else None,
            recording_program=program or (config.recording_program if config else None),
            logger=logger,
            device=config.recorder_device if config else None,
        )
    except Exception as e:
        logger.error(f"Failed to create listener: {e}", exc_info=True)
        return False

    hotwords = ", ".join(h for spec in listener.models for h in spec.hotwords)
    print("=" * 70)
    print("🎯 HOTWORD LISTENER")
    print("=" * 70)
    print(f"Recording program: {listener.recorder_config.program}")
    print(f"Listening for: {hotwords}")
    print("Press Ctrl+C to stop")
    print("=" * 70)
    print()

    def on_hotword(event: HotwordEvent):
        print(f"\n🎤 HOTWORD DETECTED: '{event.hotword}' (model {event.index})\n")

    def on_error(event):
        print(f"⚠️  {event.message}")

    listener.on(EventType.HOTWORD, on_hotword)
    listener.on(EventType.ERROR, on_error)
    if show_sound:
        listener.on(EventType.SOUND, lambda event: print(f"🗣️  sound ({len(event.buffer)} bytes)"))
        listener.on(EventType.SILENCE, lambda event: print("🔇 silence"))

    done = threading.Event()

    def signal_handler(sig, frame):
        logger.info(f"Received signal {sig}, stopping listener...")
        done.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        listener.start()
        done.wait()
        return True
    except Exception as e:
        logger.error(f"Error running listener: {e}", exc_info=True)
        return False
    finally:
        listener.close()
        print("\n✓ Listener stopped")
