# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tokenauth.application.services.password_hashing import BCRYPT_MAX_PASSWORD_BYTES
from tokenauth.domain.users.entities import RegisteredUser
from tokenauth.domain.users.exceptions import ConflictError, DuplicateCredentialError
from tokenauth.domain.users.repositories import PasswordHasher, UserRepository
from tokenauth.shared.errors.base import ValidationError
from tokenauth.shared.logging import logger

MIN_PASSWORD_LENGTH = 6


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str, username: str, password: str) -> RegisteredUser:
        _validate_registration(email, username, password)

        hashed = self._password_hasher.hash(password)
        try:
            user_id = self._users.create_user(email, username, hashed)
        except DuplicateCredentialError as exc:
            logger.info(f"auth.register: duplicate credential username={username}")
            raise ConflictError() from exc

        logger.info(f"auth.register: ok user_id={user_id}")
        return RegisteredUser(user_id=user_id)


def _validate_registration(email: str, username: str, password: str) -> None:
    missing = [
        name
        for name, value in (("email", email), ("username", username), ("password", password))
        if not value
    ]
    if missing:
        raise ValidationError(
            "missing_fields",
            context={"fields": missing},
            message="Email, username, and password are required",
        )

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            "password_too_short",
            context={"min_length": MIN_PASSWORD_LENGTH},
            message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    if len(password.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(
            "password_too_long",
            context={"max_bytes": BCRYPT_MAX_PASSWORD_BYTES},
            message=f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
        )
