"""Use-case for revoking access tokens."""

from __future__ import annotations

from typing import cast

from tokenauth.application.use_cases.users.verify_token import VerifyTokenUseCase
from tokenauth.domain.users.repositories import SessionTokenRepository
from tokenauth.shared.logging import logger


class LogoutUserUseCase:
    def __init__(
        self,
        *,
        tokens: SessionTokenRepository,
        verify: VerifyTokenUseCase,
    ) -> None:
        self._tokens = tokens
        self._verify = verify

    def execute(self, token: str | None) -> None:
        identity = self._verify.execute(token)
        self._tokens.revoke(cast(str, token))
        logger.info(f"auth.logout: ok user_id={identity.id}")
