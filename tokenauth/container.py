"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from tenacity import wait_exponential

from tokenauth.application.services.password_hashing import BcryptPasswordHasher
from tokenauth.application.services.token_generation import SecretsTokenGenerator
from tokenauth.application.use_cases.users.login_user import LoginUserUseCase
from tokenauth.application.use_cases.users.logout_user import LogoutUserUseCase
from tokenauth.application.use_cases.users.register_user import RegisterUserUseCase
from tokenauth.application.use_cases.users.verify_token import VerifyTokenUseCase
from tokenauth.infrastructure.audit import ActivityLogSink
from tokenauth.infrastructure.db import Database
from tokenauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from tokenauth.interfaces.http.controllers.auth_controller import AuthController
from tokenauth.interfaces.http.controllers.misc_controller import MiscController
from tokenauth.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, database: Database) -> None:
        self.config = config
        self.database = database

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.security.bcrypt_rounds)

    @cached_property
    def token_generator(self) -> SecretsTokenGenerator:
        return SecretsTokenGenerator()

    @cached_property
    def login_event_sink(self) -> ActivityLogSink:
        return ActivityLogSink()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(self.database.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        resilience = self.config.resilience
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
            password_hasher=self.password_hasher,
            token_generator=self.token_generator,
            login_events=self.login_event_sink,
            max_issue_attempts=resilience.token_issue_attempts,
            retry_wait=wait_exponential(
                multiplier=resilience.backoff_base, max=resilience.backoff_cap
            ),
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(tokens=self.session_token_repository)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(
            tokens=self.session_token_repository,
            verify=self.verify_token_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            verify_use_case=self.verify_token_use_case,
            metrics_enabled=self.config.observability.metrics_enabled,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            self.database,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
