# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)
from tenacity.wait import wait_base

from tokenauth.domain.users.entities import LoginEvent, LoginResult, User
from tokenauth.domain.users.exceptions import DuplicateTokenError, InvalidCredentialsError
from tokenauth.domain.users.repositories import (
    LoginEventSink,
    PasswordHasher,
    SessionTokenRepository,
    TokenGenerator,
    UserRepository,
)
from tokenauth.shared.errors.base import StoreUnavailableError, TransientError, ValidationError
from tokenauth.shared.logging import logger

TOKEN_TTL = timedelta(days=30)
DEFAULT_ISSUE_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _log_issue_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"auth.login: token issue attempt={retry_state.attempt_number} failed "
        f"({type(exc).__name__}), retrying"
    )


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenRepository,
        password_hasher: PasswordHasher,
        token_generator: TokenGenerator,
        login_events: LoginEventSink,
        max_issue_attempts: int = DEFAULT_ISSUE_ATTEMPTS,
        retry_wait: wait_base | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._token_generator = token_generator
        self._login_events = login_events
        self._max_issue_attempts = max_issue_attempts
        self._retry_wait = retry_wait or wait_none()
        self._clock = clock
        self._decoy_hash: str | None = None

    def execute(
        self, identifier: str, password: str, source_address: str | None = None
    ) -> LoginResult:
        missing = [
            name
            for name, value in (("username", identifier), ("password", password))
            if not value
        ]
        if missing:
            raise ValidationError(
                "missing_fields",
                context={"fields": missing},
                message="Username and password are required",
            )

        user = self._authenticate(identifier, password)

        expires_at = self._clock() + TOKEN_TTL
        token = self._issue(user.id, expires_at)

        self._record_login(user, source_address)
        logger.info(f"auth.login: ok user_id={user.id}")
        return LoginResult(token=token, user=user.public_view())

    def _authenticate(self, identifier: str, password: str) -> User:
        user = self._users.find_by_identifier(identifier)
        if user is None:
            # burn a hash comparison so unknown users cost the same as wrong passwords
            self._password_hasher.verify(password, self._decoy())
            logger.warning("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.warning("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        return user

    def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self._password_hasher.hash("decoy-password")
        return self._decoy_hash

    def _issue(self, user_id: int, expires_at: datetime) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self._max_issue_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type((DuplicateTokenError, StoreUnavailableError)),
            before_sleep=_log_issue_retry,
            reraise=True,
        )
        try:
            return retrying(self._issue_once, user_id, expires_at)
        except DuplicateTokenError as exc:
            logger.error(
                f"auth.login: token collision persisted after {self._max_issue_attempts} attempts"
            )
            raise TransientError(
                "token_collision",
                context={"attempts": self._max_issue_attempts},
            ) from exc

    def _issue_once(self, user_id: int, expires_at: datetime) -> str:
        value = self._token_generator.generate()
        self._tokens.issue(user_id, value, expires_at)
        return value

    def _record_login(self, user: User, source_address: str | None) -> None:
        event = LoginEvent(
            user_id=user.id,
            username=user.username,
            email=user.email,
            source_address=source_address,
            timestamp=self._clock(),
        )
        try:
            self._login_events.record_login(event)
        except Exception as exc:
            # the activity log is best effort; the login already succeeded
            logger.warning(f"auth.login: failed to record login event: {type(exc).__name__}")
