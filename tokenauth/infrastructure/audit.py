# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json

from tokenauth.domain.users.entities import LoginEvent
from tokenauth.domain.users.repositories import LoginEventSink
from tokenauth.shared.logging import activity_logger, logger


class ActivityLogSink(LoginEventSink):
    """Writes one JSON line per login to the ``user_activity`` channel."""

    def record_login(self, event: LoginEvent) -> None:
        activity_logger().info(json.dumps(event.to_dict(), ensure_ascii=False))
        logger.debug(f"audit: login recorded user_id={event.user_id} ip={event.source_address}")


__all__ = ["ActivityLogSink"]
