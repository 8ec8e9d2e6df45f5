"""Configuration manager for persistent settings stored as JSON."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from minimail.core.constants import SMTPPorts

from .errors import (
    FileSystemError,
    InvalidConfigError,
)
from .logging import get_logger, log_call
from .paths import CONFIG_PATH

logger = get_logger(__name__)

ENV_PREFIX = "MINIMAIL_SMTP_"


class SessionConfig(BaseModel):
    """Connection settings for one SMTP session."""

    host: str = ""
    port: int = Field(default=SMTPPorts.SMTP, ge=1, le=65535)
    domain: str = "localhost"  # sent with EHLO
    use_tls: bool = False
    timeout: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)  # None blocks forever


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    log_level: str = "ERROR"


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    version: str = "0.1.0"
    smtp: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages persistent application configuration."""

    _instance = None
    _initialized = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        if not ConfigManager._initialized:
            self.path = Path(config_path) if config_path else CONFIG_PATH
            self.config = self._load_or_create_config()
            self._apply_env_overrides()
            logger.info(f"Configuration loaded from {self.path}")
            ConfigManager._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Forget the shared instance so the next call reloads from disk."""
        cls._instance = None
        cls._initialized = False

    def _load_or_create_config(self) -> AppConfig:
        """Load configuration from file or create default if not present."""

        if not self.path.exists():
            logger.info("No config file found, creating default configuration.")
            config = AppConfig()
            self._save_config(config)
            return config

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = AppConfig.model_validate(data)
            logger.debug("Configuration successfully loaded and validated.")
            return config

        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse config file: {e}")
            raise InvalidConfigError(
                f"Configuration file is not valid JSON: {str(e)}"
            ) from e
        except ValidationError as e:
            logger.warning(f"Failed to validate config file: {e}")
            raise InvalidConfigError(
                f"Configuration data does not match expected schema: {str(e)}"
            ) from e
        except OSError as e:
            raise FileSystemError(f"Failed to read configuration file: {str(e)}") from e

    def _apply_env_overrides(self) -> None:
        """Overlay ``MINIMAIL_SMTP_*`` variables (and a local .env) on the SMTP section."""

        load_dotenv(find_dotenv(usecwd=True))

        overrides: Dict[str, Any] = {}
        for field_name in SessionConfig.model_fields:
            value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None and value != "":
                overrides[field_name] = value

        if not overrides:
            return

        try:
            self.config.smtp = SessionConfig(
                **{**self.config.smtp.model_dump(), **overrides}
            )
        except ValidationError as e:
            raise InvalidConfigError(
                f"Invalid SMTP settings in environment: {str(e)}"
            ) from e

        logger.debug(f"Applied environment overrides: {sorted(overrides)}")

    def _save_config(self, config: Optional[AppConfig] = None):
        """Save the current configuration to file."""

        config = config or self.config

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(config.model_dump(), f, indent=2, ensure_ascii=False)
            logger.debug("Configuration successfully saved.")
        except OSError as e:
            raise FileSystemError(
                f"Failed to write configuration file: {str(e)}"
            ) from e

    @log_call
    def session_config(self, **overrides) -> SessionConfig:
        """Return the SMTP settings with non-``None`` overrides applied.

        Raises:
            InvalidConfigError: If an override fails validation
        """
        values = self.config.smtp.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return SessionConfig(**values)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid SMTP settings: {str(e)}") from e

    def get_config(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value using dot-separated key path."""

        obj: Any = self.config
        for key in key_path.split("."):
            if not hasattr(obj, key):
                return default
            obj = getattr(obj, key)
        return obj
