# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    Identity,
    LoginEvent,
    LoginResult,
    PublicUser,
    RegisteredUser,
    SessionToken,
    TokenRecord,
    User,
)
from .exceptions import (
    ConflictError,
    DuplicateCredentialError,
    DuplicateTokenError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from .repositories import (
    LoginEventSink,
    PasswordHasher,
    SessionTokenRepository,
    TokenGenerator,
    UserRepository,
)

__all__ = [
    "ConflictError",
    "DuplicateCredentialError",
    "DuplicateTokenError",
    "ExpiredTokenError",
    "Identity",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "LoginEvent",
    "LoginEventSink",
    "LoginResult",
    "MissingTokenError",
    "PasswordHasher",
    "PublicUser",
    "RegisteredUser",
    "SessionToken",
    "SessionTokenRepository",
    "TokenGenerator",
    "TokenRecord",
    "User",
    "UserRepository",
]
