# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from tokenauth.domain.users.entities import Identity
from tokenauth.domain.users.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from tokenauth.domain.users.repositories import SessionTokenRepository
from tokenauth.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class VerifyTokenUseCase:
    """Gate for every protected operation: resolve a bearer token to its owner."""

    def __init__(
        self,
        *,
        tokens: SessionTokenRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tokens = tokens
        self._clock = clock

    def execute(self, token: str | None) -> Identity:
        if not token:
            raise MissingTokenError()

        record = self._tokens.lookup(token)
        if record is None:
            logger.warning("auth.verify: unknown token")
            raise InvalidTokenError()

        if record.is_expired(self._clock()):
            logger.info(f"auth.verify: expired token user_id={record.user_id}")
            raise ExpiredTokenError()

        return record.identity()
