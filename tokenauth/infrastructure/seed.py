# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tokenauth.domain.users.exceptions import DuplicateCredentialError
from tokenauth.domain.users.repositories import PasswordHasher, UserRepository
from tokenauth.shared.config.settings import SeedConfig
from tokenauth.shared.logging import logger


def seed_default_user(
    users: UserRepository,
    password_hasher: PasswordHasher,
    seed: SeedConfig,
) -> int | None:
    """Create the default account unless its username or email is already taken.

    Returns the new user id, or ``None`` when nothing was created.
    """
    if users.find_by_identifier(seed.username) or users.find_by_identifier(seed.email):
        logger.info(f"seed: default user '{seed.username}' already present, skipping")
        return None

    try:
        user_id = users.create_user(seed.email, seed.username, password_hasher.hash(seed.password))
    except DuplicateCredentialError:
        logger.info(f"seed: default user '{seed.username}' created concurrently, skipping")
        return None

    logger.info(f"seed: created default user '{seed.username}' id={user_id}")
    return user_id


__all__ = ["seed_default_user"]
