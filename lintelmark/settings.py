from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from lintelmark.exceptions import InvalidConfiguration
from lintelmark.logging_config import setup_logging
from lintelmark.unify.config import ToleranceConfig

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    log_file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:  # noqa: D401
        if value is None:
            return "INFO"
        return str(value).upper()


class Settings(BaseModel):
    unification: ToleranceConfig = Field(default_factory=ToleranceConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.
        
        Args:
            path: Optional path to configuration file. If not provided, uses
                LINTELMARK_CONFIG environment variable or defaults to config/default.yaml.
        
        Returns:
            Settings instance with loaded configuration.
        
        Raises:
            FileNotFoundError: If configuration file does not exist.
            InvalidConfiguration: If configuration is invalid.
        """
        config_path = path or Path(os.getenv("LINTELMARK_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise InvalidConfiguration(f"Invalid YAML in {config_path}: {exc}", {"path": str(config_path)}) from exc
        if not isinstance(payload, dict):
            raise InvalidConfiguration(f"Configuration root must be a mapping: {config_path}", {"path": str(config_path)})
        try:
            return cls(**payload)
        except ValidationError as exc:
            raise InvalidConfiguration(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc

    def configure_logging(self) -> None:
        """Apply the logging section to the loguru sinks."""
        setup_logging(
            level=self.logging.level,
            json_format=self.logging.json_format,
            log_file=self.logging.log_file,
            rotation=self.logging.rotation,
            retention=self.logging.retention,
        )


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "LoggingSettings",
    "get_settings",
]
