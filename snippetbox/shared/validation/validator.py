# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Field and non-field error accumulation for HTML forms."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

EMAIL_RX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+\/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*\Z"
)


@dataclass(slots=True)
class Validator:
    """Collects validation failures for a single form submission.

    ``field_errors`` keeps one message per field; the first failure recorded
    for a field wins. ``non_field_errors`` keeps insertion order.
    """

    field_errors: dict[str, str] = field(default_factory=dict)
    non_field_errors: list[str] = field(default_factory=list)

    def valid(self) -> bool:
        return not self.field_errors and not self.non_field_errors

    def add_field_error(self, key: str, message: str) -> None:
        self.field_errors.setdefault(key, message)

    def add_non_field_error(self, message: str) -> None:
        self.non_field_errors.append(message)

    def check_field(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_field_error(key, message)


def not_blank(value: str) -> bool:
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    return len(value) <= n


def min_chars(value: str, n: int) -> bool:
    return len(value) >= n


def permitted_value(value: Any, *permitted_values: Any) -> bool:
    return any(value == candidate for candidate in permitted_values)


def matches(value: str, rx: re.Pattern[str]) -> bool:
    return rx.search(value) is not None


__all__ = [
    "EMAIL_RX",
    "Validator",
    "matches",
    "max_chars",
    "min_chars",
    "not_blank",
    "permitted_value",
]
