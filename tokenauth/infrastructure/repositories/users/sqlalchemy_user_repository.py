# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from tokenauth.domain.users.entities import SessionToken as DomainSessionToken
from tokenauth.domain.users.entities import TokenRecord
from tokenauth.domain.users.entities import User as DomainUser
from tokenauth.domain.users.exceptions import DuplicateCredentialError, DuplicateTokenError
from tokenauth.domain.users.repositories import SessionTokenRepository, UserRepository
from tokenauth.infrastructure.db.models import SessionToken, User
from tokenauth.infrastructure.unit_of_work import unit_of_work_scope
from tokenauth.shared.errors import StoreUnavailableError
from tokenauth.shared.logging import logger

SessionFactory = Callable[[], Session]


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything we write is UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@contextmanager
def _store_errors(store: str) -> Iterator[None]:
    try:
        yield
    except OperationalError as exc:
        logger.error(f"{store}: storage unavailable ({exc.__class__.__name__})")
        raise StoreUnavailableError(context={"store": store}) from exc


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        username=row.username,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at) or datetime.now(UTC),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def create_user(self, email: str, username: str, password_hash: str) -> int:
        try:
            with _store_errors("users"), unit_of_work_scope(self._session_factory) as session:
                row = User(email=email, username=username, password_hash=password_hash)
                session.add(row)
                session.flush()
                return row.id
        except IntegrityError as exc:
            raise DuplicateCredentialError(username) from exc

    def find_by_identifier(self, identifier: str) -> DomainUser | None:
        with _store_errors("users"), unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.username == identifier).first()
            if row is None:
                row = session.query(User).filter(User.email == identifier).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with _store_errors("users"), unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.id == user_id).first()
            return _to_domain(row) if row else None


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def issue(self, user_id: int, token: str, expires_at: datetime | None) -> DomainSessionToken:
        created_at = datetime.now(UTC)
        # SQLite keeps only the wall-clock part, so store everything as UTC
        expires_at = _as_utc(expires_at)
        try:
            with _store_errors("tokens"), unit_of_work_scope(self._session_factory) as session:
                session.add(
                    SessionToken(
                        user_id=user_id,
                        token=token,
                        created_at=created_at,
                        expires_at=expires_at,
                    )
                )
                session.flush()
        except IntegrityError as exc:
            raise DuplicateTokenError() from exc
        return DomainSessionToken(
            user_id=user_id,
            token=token,
            created_at=created_at,
            expires_at=expires_at,
        )

    def lookup(self, token: str) -> TokenRecord | None:
        with _store_errors("tokens"), unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(
                    SessionToken.user_id,
                    SessionToken.expires_at,
                    User.email,
                    User.username,
                )
                .join(User, User.id == SessionToken.user_id)
                .filter(SessionToken.token == token)
                .first()
            )
            if row is None:
                return None
            return TokenRecord(
                user_id=row.user_id,
                email=row.email,
                username=row.username,
                expires_at=_as_utc(row.expires_at),
            )

    def revoke(self, token: str) -> None:
        with _store_errors("tokens"), unit_of_work_scope(self._session_factory) as session:
            session.query(SessionToken).filter(SessionToken.token == token).delete(
                synchronize_session=False
            )

    def purge_expired(self, now: datetime) -> int:
        cutoff = _as_utc(now)
        with _store_errors("tokens"), unit_of_work_scope(self._session_factory) as session:
            removed = (
                session.query(SessionToken)
                .filter(SessionToken.expires_at.is_not(None), SessionToken.expires_at < cutoff)
                .delete(synchronize_session=False)
            )
        logger.info(f"tokens: purged {removed} expired token(s)")
        return removed
