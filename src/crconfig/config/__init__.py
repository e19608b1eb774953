"""CRConfig run configuration."""

from .settings import DatabaseSettings, LoggingSettings, SynthSettings, load_settings

__all__ = [
    "DatabaseSettings",
    "LoggingSettings",
    "SynthSettings",
    "load_settings",
]
