# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import LoginEvent, SessionToken, TokenRecord, User


class UserRepository(Protocol):
    def create_user(self, email: str, username: str, password_hash: str) -> int: ...
    def find_by_identifier(self, identifier: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...


class SessionTokenRepository(Protocol):
    def issue(self, user_id: int, token: str, expires_at: datetime | None) -> SessionToken: ...
    def lookup(self, token: str) -> TokenRecord | None: ...
    def revoke(self, token: str) -> None: ...
    def purge_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenGenerator(Protocol):
    def generate(self) -> str: ...


class LoginEventSink(Protocol):
    def record_login(self, event: LoginEvent) -> None: ...
