# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from tokenauth.infrastructure.db import Database
from tokenauth.shared.logging import logger


def check_database(database: Database) -> bool:
    try:
        return database.ping()
    except SQLAlchemyError as exc:
        logger.warning(f"health: database ping failed ({exc.__class__.__name__})")
        return False


__all__ = ["check_database"]
