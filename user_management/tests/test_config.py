from __future__ import annotations

import runpy

import pytest
from flask import Flask

from user_management.app import create_app
from user_management.shared.config import (
    AppConfig,
    DatabaseConfig,
    JwtConfig,
    SecurityConfig,
    load_config,
)
from user_management.shared.errors import ConfigurationError


def test_missing_signing_key_fails_fast() -> None:
    config = AppConfig(database=DatabaseConfig(url="sqlite://"), jwt=JwtConfig(key=""))

    with pytest.raises(ConfigurationError) as exc_info:
        config.validate_required()

    assert exc_info.value.setting == "JWT_KEY"


def test_create_app_refuses_to_start_without_key() -> None:
    config = AppConfig(database=DatabaseConfig(url="sqlite://"), jwt=JwtConfig(key="   "))

    with pytest.raises(ConfigurationError):
        create_app(config)


@pytest.mark.parametrize("field", ["issuer", "audience"])
def test_issuer_and_audience_are_required(field: str) -> None:
    jwt = JwtConfig(key="k" * 32, **{field: ""})
    config = AppConfig(database=DatabaseConfig(url="sqlite://"), jwt=jwt)

    with pytest.raises(ConfigurationError) as exc_info:
        config.validate_required()

    assert exc_info.value.setting == f"JWT_{field.upper()}"


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_KEY", "env-key-that-is-long-enough-for-hs256")
    monkeypatch.setenv("JWT_TTL_MINUTES", "15")
    monkeypatch.setenv("STORAGE_RETRY_ATTEMPTS", "2")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    config = AppConfig()

    assert config.jwt.key == "env-key-that-is-long-enough-for-hs256"
    assert config.jwt.ttl_minutes == 15
    assert config.resilience.max_attempts == 2
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]


def test_defaults() -> None:
    jwt = JwtConfig(key="k" * 32)

    assert jwt.ttl_minutes == 30
    assert jwt.algorithm == "HS256"
    assert SecurityConfig().enable_hsts is False


def test_non_hmac_algorithm_rejected() -> None:
    with pytest.raises(ValueError):
        JwtConfig(key="k" * 32, algorithm="RS256")


def test_module_entry_point_runs_without_debugger(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_KEY", "env-key-that-is-long-enough-for-hs256")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    load_config.cache_clear()
    calls: list[dict] = []
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: calls.append(kwargs))

    try:
        runpy.run_module("user_management.app", run_name="__main__")
        assert calls == []

        runpy.run_module("user_management", run_name="__main__")
    finally:
        load_config.cache_clear()

    assert len(calls) == 1
    assert not calls[0].get("debug")
