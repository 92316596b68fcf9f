from __future__ import annotations

from collections.abc import Iterator

import pytest

from tokenauth.infrastructure.db import Database
from tokenauth.shared.config import load_config


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database.from_url("sqlite:///:memory:")
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture(autouse=True)
def _fresh_config() -> Iterator[None]:
    load_config.cache_clear()
    yield
    load_config.cache_clear()
