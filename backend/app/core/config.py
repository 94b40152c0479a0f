from __future__ import annotations

import math
from enum import Enum
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_PORT = 8080

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class AppEnv(str, Enum):
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"


class AppSettings(BaseModel):
    name: str = Field(default="Auto-Healing MIG Demo")
    env: AppEnv = Field(default=AppEnv.DEV)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=DEFAULT_PORT)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    shutdown_grace_seconds: float = Field(default=10.0, gt=0)
    stress_default_duration_ms: int = Field(default=5000, gt=0)
    expose_error_details: bool = Field(default=True)

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not (1 <= value <= 65535):
            raise ValueError("PORT must be between 1 and 65535")
        return value


class OTELSettings(BaseModel):
    enabled: bool = Field(default=False)
    service_name: str = Field(default="auto-healing-demo")
    exporter_otlp_endpoint: str = Field(default="http://localhost:4317")


class Settings(BaseSettings):
    """
    Top-level application settings loaded from environment.

    Variables are read without a prefix (PORT, HOST, LOG_LEVEL, ...) since
    the hosting platform injects PORT directly. Raw values are kept loose
    here and validated when the typed sub-settings are built.
    """

    # App
    app_name: Optional[str] = None
    app_env: Optional[str] = None
    host: Optional[str] = None
    port: Optional[str] = None
    log_level: Optional[str] = None
    shutdown_grace_seconds: Optional[str] = None
    stress_default_duration_ms: Optional[str] = None
    expose_error_details: Optional[str] = None

    # OTEL
    otel_enabled: Optional[str] = None
    otel_service_name: Optional[str] = None
    otel_exporter_otlp_endpoint: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def app(self) -> AppSettings:
        defaults = AppSettings()
        return AppSettings(
            name=self.app_name or defaults.name,
            env=self._parse_env(self.app_env, defaults.env),
            host=self.host or defaults.host,
            port=self._parse_port(self.port),
            log_level=self._parse_log_level(self.log_level, defaults.log_level),
            shutdown_grace_seconds=self._parse_positive(
                self.shutdown_grace_seconds, float, defaults.shutdown_grace_seconds
            ),
            stress_default_duration_ms=self._parse_positive(
                self.stress_default_duration_ms, int, defaults.stress_default_duration_ms
            ),
            expose_error_details=self._parse_bool(
                self.expose_error_details, defaults.expose_error_details
            ),
        )

    @property
    def otel(self) -> OTELSettings:
        defaults = OTELSettings()
        return OTELSettings(
            enabled=self._parse_bool(self.otel_enabled, defaults.enabled),
            service_name=self.otel_service_name or defaults.service_name,
            exporter_otlp_endpoint=self.otel_exporter_otlp_endpoint
            or defaults.exporter_otlp_endpoint,
        )

    # Helpers
    #
    # A bad value never stops the instance from starting: each falls back to
    # its default.

    @staticmethod
    def _parse_port(raw: Optional[str]) -> int:
        """Return the configured port, or the default when unset or invalid."""
        if raw is None:
            return DEFAULT_PORT
        try:
            port = int(str(raw).strip())
        except ValueError:
            return DEFAULT_PORT
        if not (1 <= port <= 65535):
            return DEFAULT_PORT
        return port

    @staticmethod
    def _parse_env(raw: Optional[str], default: AppEnv) -> AppEnv:
        try:
            return AppEnv((raw or "").strip().lower())
        except ValueError:
            return default

    @staticmethod
    def _parse_log_level(raw: Optional[str], default: str) -> str:
        level = (raw or "").strip().upper()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        return level if level in _LOG_LEVELS else default

    @staticmethod
    def _parse_positive(raw: Optional[str], kind: type, default):
        try:
            value = kind(str(raw).strip())
        except (TypeError, ValueError):
            return default
        return value if value > 0 and math.isfinite(value) else default

    @staticmethod
    def _parse_bool(raw: Optional[str], default: bool) -> bool:
        value = (raw or "").strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        return default


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance to avoid re-parsing env on every import.

    Usage:
        from backend.app.core.config import get_settings
        settings = get_settings()
        settings.app.port, settings.app.shutdown_grace_seconds, ...
    """
    return Settings()


settings = get_settings()
