# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    MessageDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
    UserDTO,
)

__all__ = [
    "LoginRequestDTO",
    "LoginResponseDTO",
    "MessageDTO",
    "RegisterRequestDTO",
    "RegisterResponseDTO",
    "UserDTO",
]
