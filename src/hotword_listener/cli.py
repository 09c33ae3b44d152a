"""Command-line interface for the hotword listener."""

import argparse
import sys


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hotword Listener - microphone hotword detection with openWakeWord",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hotword-listener listen                  # Listen and print hotword/sound/silence events
  hotword-listener listen --program arecord
  hotword-listener download-models         # Download pre-trained hotword models
  hotword-listener config                  # Show current configuration
  hotword-listener verify                  # Verify installation
        """,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Listen command
    listen_parser = subparsers.add_parser("listen", help="Listen for hotwords and print events")
    listen_parser.add_argument(
        "--config",
        type=str,
        default="config/config.yaml",
        help="Path to configuration file (default: config/config.yaml)",
    )
    listen_parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides config.yaml setting)",
    )
    listen_parser.add_argument(
        "--program",
        type=str,
        default=None,
        choices=["rec", "sox", "arecord"],
        help="Recording program (overrides config.yaml setting)",
    )
    listen_parser.add_argument(
        "--sound",
        action="store_true",
        help="Also print sound and silence events",
    )

    # Download models command
    subparsers.add_parser("download-models", help="Download pre-trained hotword models")

    # Config command
    config_parser = subparsers.add_parser("config", help="Show current configuration")
    config_parser.add_argument("--config", type=str, default="config/config.yaml")

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify installation and dependencies")
    verify_parser.add_argument("--config", type=str, default="config/config.yaml")

    args = parser.parse_args()

    try:
        if args.command == "listen":
            from hotword_listener.commands.listen import main as listen_main

            sys.exit(
                0
                if listen_main(
                    config_path=args.config,
                    log_level=args.log_level,
                    program=args.program,
                    show_sound=args.sound,
                )
                else 1
            )

        elif args.command == "download-models":
            from hotword_listener.commands.download_models import main

            sys.exit(0 if main() else 1)

        elif args.command == "config":
            from hotword_listener.commands.show_config import main

            sys.exit(0 if main(config_path=args.config) else 1)

        elif args.command == "verify":
            from hotword_listener.commands.verify import main

            sys.exit(0 if main(config_path=args.config) else 1)

        else:
            parser.print_help()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
