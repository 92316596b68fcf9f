from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from tokenauth.application.services.password_hashing import BcryptPasswordHasher
from tokenauth.infrastructure.db import Database
from tokenauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from tokenauth.infrastructure.seed import seed_default_user
from tokenauth.scripts.init_db import main
from tokenauth.shared.config.settings import SeedConfig


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("BCRYPT_ROUNDS", "10")
    return f"sqlite:///{tmp_path / 'auth.db'}"


def test_init_db_creates_schema_and_seeds_admin(
    database_url: str, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["--database-url", database_url]) == 0
    assert "Created default user 'admin'" in capsys.readouterr().out

    database = Database.from_url(database_url)
    try:
        admin = SqlAlchemyUserRepository(database.session_factory).find_by_identifier("admin")
        assert admin is not None
        assert admin.email == "admin@example.com"
        assert BcryptPasswordHasher(rounds=10).verify("admin123", admin.password_hash)
    finally:
        database.dispose()


def test_init_db_is_rerunnable(database_url: str, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--database-url", database_url])
    capsys.readouterr()

    assert main(["--database-url", database_url]) == 0
    assert "Created default user" not in capsys.readouterr().out


def test_init_db_purges_expired_tokens(
    database_url: str, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["--database-url", database_url, "--no-seed"])
    database = Database.from_url(database_url)
    try:
        user_id = SqlAlchemyUserRepository(database.session_factory).create_user(
            "a@x.io", "alice", "hash"
        )
        tokens = SqlAlchemySessionTokenRepository(database.session_factory)
        tokens.issue(user_id, "stale", datetime.now(UTC) - timedelta(hours=1))
    finally:
        database.dispose()

    main(["--database-url", database_url, "--no-seed", "--purge-expired"])

    assert "Removed 1 expired token(s)" in capsys.readouterr().out


def test_seed_skips_when_email_already_taken(database: Database) -> None:
    users = SqlAlchemyUserRepository(database.session_factory)
    users.create_user("admin@example.com", "someone", "hash")
    seed = SeedConfig(email="admin@example.com", username="admin", password="admin123")  # type: ignore[call-arg]

    assert seed_default_user(users, BcryptPasswordHasher(rounds=10), seed) is None
    assert users.find_by_identifier("admin") is None
