# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from user_management.shared.errors.base import ConfigurationError

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
    frozen=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///users.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG


class JwtConfig(BaseSettings):
    key: str = Field("", alias="JWT_KEY")
    issuer: str = Field("user-management-api", alias="JWT_ISSUER")
    audience: str = Field("user-management-clients", alias="JWT_AUDIENCE")
    ttl_minutes: int = Field(30, ge=1, alias="JWT_TTL_MINUTES")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")

    model_config = _SECTION_CONFIG

    @field_validator("algorithm")
    @classmethod
    def _require_hmac(cls, value: str) -> str:
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError("only HMAC signing algorithms are supported")
        return value


class ResilienceConfig(BaseSettings):
    max_attempts: int = Field(3, ge=1, le=3, alias="STORAGE_RETRY_ATTEMPTS")
    delay_seconds: float = Field(2.0, ge=0.0, alias="STORAGE_RETRY_DELAY")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _jwt_config_factory() -> JwtConfig:
    return JwtConfig()  # type: ignore[call-arg]


def _resilience_config_factory() -> ResilienceConfig:
    return ResilienceConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    jwt: JwtConfig = Field(default_factory=_jwt_config_factory)
    resilience: ResilienceConfig = Field(default_factory=_resilience_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = _SECTION_CONFIG

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _warn_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.database.url.startswith("sqlite"):
            warnings.append("⚠️  SQLite database configured in production")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def validate_required(self) -> "AppConfig":
        """Fail fast on settings the service cannot run without."""

        required = {
            "JWT_KEY": self.jwt.key,
            "JWT_ISSUER": self.jwt.issuer,
            "JWT_AUDIENCE": self.jwt.audience,
            "DATABASE_URL": self.database.url,
        }
        for setting, value in required.items():
            if not value or not value.strip():
                raise ConfigurationError(setting)
        return self


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "JwtConfig",
    "ResilienceConfig",
    "SecurityConfig",
    "load_config",
]
