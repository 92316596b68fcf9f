# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from tokenauth.container import Container
from tokenauth.infrastructure.db import Database
from tokenauth.shared.config import AppConfig, load_config
from tokenauth.shared.logging import logger, setup_logging
from tokenauth.shared.middleware.error_handler import configure_error_handling
from tokenauth.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, database: Database | None = None) -> Flask:
    config = config or load_config()
    setup_logging(
        config.logging.level,
        log_file=config.logging.file,
        debug_mode=config.logging.debug,
    )

    if database is None:
        database = Database(config.database)
        database.create_schema()
    container = Container(config, database)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["tokenauth.container"] = container

    configure_error_handling(app, debug_mode=config.logging.debug)
    configure_request_logging(app, debug_mode=config.logging.debug)

    CORS(app, resources={r"/api/*": {"origins": config.security.allowed_origins}})
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=3000, debug=False)
