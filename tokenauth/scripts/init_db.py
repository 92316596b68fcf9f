# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create the schema, seed the default account and optionally purge expired tokens."""

from __future__ import annotations

import argparse
from datetime import UTC, datetime

from tokenauth.container import Container
from tokenauth.infrastructure.db import Database
from tokenauth.infrastructure.seed import seed_default_user
from tokenauth.shared.config import load_config
from tokenauth.shared.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Initialise the tokenauth database")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Override DATABASE_URL",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not create the default account",
    )
    parser.add_argument(
        "--purge-expired",
        action="store_true",
        help="Delete tokens whose expiry has passed",
    )
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.logging.level, log_file=config.logging.file)

    database = Database.from_url(args.database_url) if args.database_url else Database(config.database)
    try:
        database.create_schema()
        container = Container(config, database)

        if not args.no_seed:
            user_id = seed_default_user(
                container.user_repository, container.password_hasher, config.seed
            )
            if user_id is not None:
                print(f"Created default user '{config.seed.username}' (id={user_id})")

        if args.purge_expired:
            removed = container.session_token_repository.purge_expired(datetime.now(UTC))
            print(f"Removed {removed} expired token(s)")
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
