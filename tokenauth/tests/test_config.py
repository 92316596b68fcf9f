from __future__ import annotations

import pytest
from pydantic import ValidationError

from tokenauth.shared.config import load_config
from tokenauth.shared.config.settings import AppConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "BCRYPT_ROUNDS", "TOKEN_ISSUE_ATTEMPTS", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(_env_file=None)  # type: ignore[call-arg]

    assert config.security.bcrypt_rounds >= 10
    assert config.resilience.token_issue_attempts == 3
    assert not config.is_production()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("BCRYPT_ROUNDS", "11")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("TOKEN_ISSUE_ATTEMPTS", "5")

    config = load_config()

    assert config.database.url == "sqlite:///:memory:"
    assert config.security.bcrypt_rounds == 11
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
    assert config.resilience.token_issue_attempts == 5


def test_load_config_is_cached() -> None:
    assert load_config() is load_config()


def test_bcrypt_rounds_below_ten_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BCRYPT_ROUNDS", "9")

    with pytest.raises(ValidationError):
        load_config()


def test_production_refuses_dev_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "dev")

    with pytest.raises(SystemExit):
        load_config()
