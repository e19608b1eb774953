"""
Synthesizer Settings

Loads run settings from an optional YAML file, then applies environment
overrides, then explicit overrides (usually CLI arguments).

Example YAML:

    cdn: cdn1
    domain: cdn1.example.com
    database:
      url: postgres://traffic_ops:secret@db:5432/traffic_ops
    logging:
      level: INFO
      format: json
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass
class DatabaseSettings:
    """PostgreSQL connection settings."""

    url: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DatabaseSettings":
        port = data.get("port")
        return cls(
            url=data.get("url"),
            host=data.get("host"),
            port=int(port) if port is not None else None,
            database=data.get("database"),
            user=data.get("user"),
            password=data.get("password"),
        )


@dataclass
class LoggingSettings:
    level: str = "INFO"
    format: str = "json"


@dataclass
class SynthSettings:
    """Settings for one synthesis run."""

    cdn: str = ""
    domain: str = ""
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    fixture: Optional[str] = None  # YAML rows for a MemoryStore run

    def validate(self) -> None:
        """
        Check required settings.

        Raises:
            ValueError: cdn or domain is missing
        """
        if not self.cdn:
            raise ValueError("cdn is required (--cdn, CRCONFIG_CDN or 'cdn' in config file)")
        if not self.domain:
            raise ValueError(
                "domain is required (--domain, CRCONFIG_DOMAIN or 'domain' in config file)"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SynthSettings":
        logging_data = data.get("logging", {}) or {}
        return cls(
            cdn=data.get("cdn", ""),
            domain=data.get("domain", ""),
            database=DatabaseSettings.from_dict(data.get("database", {}) or {}),
            logging=LoggingSettings(
                level=logging_data.get("level", "INFO"),
                format=logging_data.get("format", "json"),
            ),
            fixture=data.get("fixture"),
        )


def _apply_env(settings: SynthSettings) -> None:
    env = os.environ
    settings.cdn = env.get("CRCONFIG_CDN", settings.cdn)
    settings.domain = env.get("CRCONFIG_DOMAIN", settings.domain)
    settings.database.url = env.get("DATABASE_URL", settings.database.url)
    settings.database.host = env.get("POSTGRES_HOST", settings.database.host)
    if "POSTGRES_PORT" in env:
        settings.database.port = int(env["POSTGRES_PORT"])
    settings.database.database = env.get("POSTGRES_DB", settings.database.database)
    settings.database.user = env.get("POSTGRES_USER", settings.database.user)
    settings.database.password = env.get("POSTGRES_PASSWORD", settings.database.password)
    settings.logging.level = env.get("LOG_LEVEL", settings.logging.level)
    settings.logging.format = env.get("LOG_FORMAT", settings.logging.format)


def load_settings(
    config_file: Optional[str] = None,
    **overrides: Any,
) -> SynthSettings:
    """
    Load synthesizer settings.

    Precedence: overrides > environment > config file > defaults.

    Args:
        config_file: Optional path to a YAML settings file
        **overrides: cdn, domain, database_url, fixture; None values are ignored

    Raises:
        FileNotFoundError: config_file does not exist
        ValueError: config file is not valid YAML or not a mapping
    """
    data: dict[str, Any] = {}
    if config_file:
        path = Path(config_file)
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping")

    settings = SynthSettings.from_dict(data)
    _apply_env(settings)

    if overrides.get("cdn"):
        settings.cdn = overrides["cdn"]
    if overrides.get("domain"):
        settings.domain = overrides["domain"]
    if overrides.get("database_url"):
        settings.database.url = overrides["database_url"]
    if overrides.get("fixture"):
        settings.fixture = overrides["fixture"]
    return settings
