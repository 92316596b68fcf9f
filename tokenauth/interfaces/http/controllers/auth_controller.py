# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from tokenauth.application.use_cases.users.login_user import LoginUserUseCase
from tokenauth.application.use_cases.users.logout_user import LogoutUserUseCase
from tokenauth.application.use_cases.users.register_user import RegisterUserUseCase
from tokenauth.application.use_cases.users.verify_token import VerifyTokenUseCase
from tokenauth.infrastructure.observability import track_operation
from tokenauth.interfaces.http.auth import auth_required, request_token
from tokenauth.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    MessageDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
    UserDTO,
)
from tokenauth.shared.errors.validation import raise_validation_error
from tokenauth.shared.middleware.request_logger import client_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        verify_use_case: VerifyTokenUseCase,
        metrics_enabled: bool = True,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._verify_use_case = verify_use_case
        self._metrics_enabled = metrics_enabled

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        with track_operation("register", enabled=self._metrics_enabled):
            result = self._register_use_case.execute(dto.email, dto.username, dto.password)

        payload = RegisterResponseDTO(user_id=result.user_id).model_dump(by_alias=True)
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        with track_operation("login", enabled=self._metrics_enabled):
            result = self._login_use_case.execute(
                dto.identifier, dto.password, client_address()
            )

        payload = LoginResponseDTO(
            token=result.token,
            user=UserDTO.model_validate(result.user),
        ).model_dump()
        return jsonify(payload), 200

    def logout(self) -> tuple[Response, int]:
        with track_operation("logout", enabled=self._metrics_enabled):
            self._logout_use_case.execute(request_token())
        return jsonify(MessageDTO(message="Logged out successfully").model_dump()), 200

    def me(self) -> tuple[Response, int]:
        return jsonify({"user": g.identity.to_dict()}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule(
            "/me",
            endpoint="me",
            view_func=auth_required(self._verify_use_case)(self.me),
            methods=["GET"],
        )
        return bp
