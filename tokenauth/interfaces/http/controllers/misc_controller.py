# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from tokenauth.infrastructure.db import Database
from tokenauth.infrastructure.health import check_database


class MiscController:
    def __init__(self, database: Database, *, metrics_enabled: bool = True) -> None:
        self._database = database
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        if check_database(self._database):
            return jsonify({"status": "ok", "database": "ok"}), 200
        return jsonify({"status": "degraded", "database": "error"}), 503

    def metrics(self) -> Response:
        return Response(generate_latest(), content_type=CONTENT_TYPE_LATEST)
