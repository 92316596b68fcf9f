"""Bearer token value generation."""

from __future__ import annotations

import secrets

from tokenauth.domain.users.repositories import TokenGenerator

# 32 random bytes: 256 bits, comfortably above the 122-bit floor of a v4 UUID
TOKEN_BYTES = 32


class SecretsTokenGenerator(TokenGenerator):
    def __init__(self, nbytes: int = TOKEN_BYTES) -> None:
        if nbytes < 16:
            raise ValueError("token entropy must be at least 128 bits")
        self._nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_urlsafe(self._nbytes)
