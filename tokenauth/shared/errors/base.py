# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def _class_default(error: AppError, name: str, kind: type) -> Any:
    # slot descriptors live on AppError; only plain class attributes count
    value = getattr(type(error), name, None)
    return value if isinstance(value, kind) else None


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_code = code or _class_default(self, "code", str) or "domain_error"
        resolved_status = (
            status or _class_default(self, "status", HTTPStatus) or HTTPStatus.BAD_REQUEST
        )
        resolved_message = message or _class_default(self, "message", str)
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            context=context,
            message=resolved_message,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context, message=message)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            context=context,
            message=message,
        )


class TransientError(InfrastructureError):
    """Safe to retry: the failure says nothing about the request itself."""

    def __init__(
        self,
        code: str = "transient_error",
        *,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            code,
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            context=context,
            message=message or "Temporary failure, please retry",
        )


class StoreUnavailableError(TransientError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            "store_unavailable",
            context=context,
            message="Storage is unavailable",
        )


__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "StoreUnavailableError",
    "TransientError",
    "ValidationError",
]
