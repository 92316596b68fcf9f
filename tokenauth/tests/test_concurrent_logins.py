from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from tokenauth.application.services.token_generation import SecretsTokenGenerator
from tokenauth.application.use_cases.users.login_user import LoginUserUseCase
from tokenauth.application.use_cases.users.logout_user import LogoutUserUseCase
from tokenauth.application.use_cases.users.register_user import RegisterUserUseCase
from tokenauth.application.use_cases.users.verify_token import VerifyTokenUseCase
from tokenauth.domain.users.entities import LoginEvent
from tokenauth.domain.users.exceptions import InvalidTokenError
from tokenauth.domain.users.repositories import PasswordHasher
from tokenauth.infrastructure.db import Database
from tokenauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)

PARALLEL_LOGINS = 8


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class NullSink:
    def record_login(self, event: LoginEvent) -> None:
        pass


@pytest.fixture()
def file_database(tmp_path: Path) -> Iterator[Database]:
    db = Database.from_url(f"sqlite:///{tmp_path / 'auth.db'}")
    db.create_schema()
    yield db
    db.dispose()


def test_parallel_logins_yield_independent_sessions(file_database: Database) -> None:
    users = SqlAlchemyUserRepository(file_database.session_factory)
    tokens = SqlAlchemySessionTokenRepository(file_database.session_factory)
    hasher = DeterministicHasher()
    RegisterUserUseCase(users=users, password_hasher=hasher).execute(
        "a@x.io", "alice", "secret1"
    )
    login = LoginUserUseCase(
        users=users,
        tokens=tokens,
        password_hasher=hasher,
        token_generator=SecretsTokenGenerator(),
        login_events=NullSink(),
    )
    verify = VerifyTokenUseCase(tokens=tokens)
    logout = LogoutUserUseCase(tokens=tokens, verify=verify)

    with ThreadPoolExecutor(max_workers=PARALLEL_LOGINS) as pool:
        results = list(
            pool.map(lambda _: login.execute("alice", "secret1"), range(PARALLEL_LOGINS))
        )

    issued = [result.token for result in results]
    assert len(set(issued)) == PARALLEL_LOGINS
    assert all(verify.execute(token).username == "alice" for token in issued)

    revoked, *remaining = issued
    logout.execute(revoked)

    with pytest.raises(InvalidTokenError):
        verify.execute(revoked)
    assert all(verify.execute(token).username == "alice" for token in remaining)
