# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .login_user import TOKEN_TTL, LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .register_user import MIN_PASSWORD_LENGTH, RegisterUserUseCase
from .verify_token import VerifyTokenUseCase

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "TOKEN_TTL",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "VerifyTokenUseCase",
]
