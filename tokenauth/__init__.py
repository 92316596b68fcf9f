# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Token-based authentication service."""

__version__ = "0.1.0"
