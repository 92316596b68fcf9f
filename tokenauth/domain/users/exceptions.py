# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from tokenauth.shared.errors.base import DomainError


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT
    message = "Email or username already exists"


class InvalidCredentialsError(DomainError):
    # Same error for an unknown identifier and a wrong password.
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class MissingTokenError(DomainError):
    code = "missing_token"
    status = HTTPStatus.UNAUTHORIZED
    message = "No token provided"


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.FORBIDDEN
    message = "Invalid token"


class ExpiredTokenError(DomainError):
    code = "expired_token"
    status = HTTPStatus.FORBIDDEN
    message = "Token expired"


class DuplicateCredentialError(Exception):
    """Raised by a credential store when an email or username is taken."""


class DuplicateTokenError(Exception):
    """Raised by a token store when the token value already exists."""
