"""Commands - all CLI command implementations."""

# Commands are typically run via CLI, not imported directly
# But we expose them for convenience

from hotword_listener.commands import (
    download_models,
    listen,
    show_config,
    verify,
)

__all__ = [
    "listen",
    "download_models",
    "show_config",
    "verify",
]
