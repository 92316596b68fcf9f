# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .error_handler import configure_error_handling
from .request_logger import client_address, configure_request_logging

__all__ = ["client_address", "configure_error_handling", "configure_request_logging"]
