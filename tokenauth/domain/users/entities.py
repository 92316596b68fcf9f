# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime

    def public_view(self) -> PublicUser:
        return PublicUser(id=self.id, email=self.email, username=self.username)


@dataclass(slots=True, frozen=True)
class PublicUser:
    """What callers may see of a user: never the password hash."""

    id: int
    email: str
    username: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "email": self.email, "username": self.username}


# verify() resolves a token to the same shape as the public view
Identity = PublicUser


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str = field(repr=False)
    created_at: datetime
    expires_at: datetime | None


@dataclass(slots=True, frozen=True)
class TokenRecord:
    """A stored token joined with its owner."""

    user_id: int
    email: str
    username: str
    expires_at: datetime | None

    def is_expired(self, now: datetime) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= now

    def identity(self) -> Identity:
        return Identity(id=self.user_id, email=self.email, username=self.username)


@dataclass(slots=True, frozen=True)
class LoginEvent:

    user_id: int
    username: str
    email: str
    source_address: str | None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    action: str = "login"

    def to_dict(self) -> dict[str, object]:
        return {
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "userId": self.user_id,
            "username": self.username,
            "action": self.action,
            "ipAddress": self.source_address,
            "email": self.email,
        }


@dataclass(slots=True, frozen=True)
class RegisteredUser:

    user_id: int


@dataclass(slots=True, frozen=True)
class LoginResult:

    token: str = field(repr=False)
    user: PublicUser
