# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from tokenauth.application.use_cases.users.verify_token import VerifyTokenUseCase
from tokenauth.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def request_token() -> str | None:
    """Read the token from ``Authorization``, bare or with a ``Bearer`` prefix."""
    header = request.headers.get("Authorization", "").strip()
    if not header:
        return None
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer":
        return value.strip() or None
    return header


def auth_required(verify: VerifyTokenUseCase) -> Callable[[F], F]:
    def decorator(f: F) -> F:
        @wraps(f)
        def inner(*a: Any, **kw: Any) -> Any:
            try:
                identity = verify.execute(request_token())
            except Exception:
                logger.warning(f"Auth failed on {request.method} {request.path}")
                raise
            g.user_id = identity.id
            g.identity = identity
            return f(*a, **kw)

        return cast(F, inner)

    return decorator


__all__ = ["auth_required", "request_token"]
