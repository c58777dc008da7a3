"""
Application configuration.

Precedence, highest first:

    CLI flags  >  environment (APP__SECTION__KEY)  >  config file  >  defaults

Config files are TOML (nested tables) or JSON (flat "section_key" keys),
chosen by file extension.
"""

import json
import tomllib
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")

KNOWN_SECTIONS = ("server", "database", "cors", "logging")


class ConfigError(Exception):
    """Configuration could not be loaded."""


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///data/budget.db"
    max_connections: int = Field(default=5, ge=1)
    echo: bool = False


class CorsConfig(BaseModel):
    allowed_origins: list[str] = []


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_logs: bool = Field(default=True, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level


class AppConfig(BaseSettings):
    """Root configuration container."""

    model_config = SettingsConfigDict(
        env_prefix="APP__",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerConfig = ServerConfig()
    database: DatabaseConfig = DatabaseConfig()
    cors: CorsConfig = CorsConfig()
    logging: LoggingConfig = LoggingConfig()


class FileConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by values already read from a config file."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]):
        super().__init__(settings_cls)
        self.data = data

    def get_field_value(self, field, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {key: value for key, value in self.data.items() if key in self.settings_cls.model_fields}


def nest_flat_keys(data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Convert flat JSON keys ("server_port") into nested sections."""
    nested: dict[str, dict[str, Any]] = {}
    for key, value in data.items():
        for section in KNOWN_SECTIONS:
            prefix = f"{section}_"
            if key.startswith(prefix):
                nested.setdefault(section, {})[key[len(prefix):]] = value
                break
        else:
            logger.warning("unknown_config_key_ignored", key=key)
    return nested


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a TOML or flat JSON config file into nested sections."""
    try:
        if path.suffix == ".json":
            with open(path, "r") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise ConfigError(f"Invalid JSON in {path}: expected an object")
            return nest_flat_keys(raw)

        with open(path, "rb") as f:
            return tomllib.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e


def load_config(
    config_path: Path | str | None = None,
    explicit: bool = False,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration from file, environment and CLI overrides.

    Args:
        config_path: Config file to read; defaults to ./config.toml
        explicit: The path was requested by the user, so it must exist
        overrides: Nested values from CLI flags, e.g. {"server": {"port": 8080}}
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    file_data: dict[str, Any] = {}
    if path.exists():
        file_data = read_config_file(path)
    elif explicit:
        raise ConfigError(f"Config file not found: {path}")

    class _LoadedConfig(AppConfig):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls,
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ):
            return (init_settings, env_settings, FileConfigSource(settings_cls, file_data))

    try:
        return _LoadedConfig(**(overrides or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
