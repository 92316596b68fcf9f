# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# accepted login keys, in precedence order
_IDENTIFIER_KEYS = ("username", "identifier", "email")


class RegisterRequestDTO(BaseModel):
    # emptiness and length rules live in the use case so they apply outside HTTP too
    email: str = Field("", max_length=255)
    username: str = Field("", max_length=255)
    password: str = Field("", max_length=1024)

    model_config = ConfigDict(extra="ignore")


class LoginRequestDTO(BaseModel):
    identifier: str = Field("", max_length=255)
    password: str = Field("", max_length=1024)

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _pick_identifier(cls, data: Any) -> Any:
        # first non-empty key wins, so {"username": "", "email": "a@x.io"} logs in by email
        if not isinstance(data, dict):
            return data
        for key in _IDENTIFIER_KEYS:
            if data.get(key):
                return {**data, "identifier": data[key]}
        return data


class UserDTO(BaseModel):
    id: int
    email: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class RegisterResponseDTO(BaseModel):
    message: str = "User registered successfully"
    user_id: int = Field(serialization_alias="userId")


class LoginResponseDTO(BaseModel):
    message: str = "Login successful"
    token: str
    user: UserDTO


class MessageDTO(BaseModel):
    message: str
