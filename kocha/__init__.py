"""Building blocks for web applications: flash messages, background events, unit fallbacks, MIME formats and a command launcher."""

__version__ = "0.1.0"
__all__ = [
    "application",
    "cli",
    "events",
    "flash",
    "formats",
    "model_types",
]