# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .validator import (
    EMAIL_RX,
    Validator,
    matches,
    max_chars,
    min_chars,
    not_blank,
    permitted_value,
)

__all__ = [
    "EMAIL_RX",
    "Validator",
    "matches",
    "max_chars",
    "min_chars",
    "not_blank",
    "permitted_value",
]
