# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:
    """Account profile. The password hash never leaves the repository."""

    id: int
    name: str
    email: str
    created: datetime


@dataclass(slots=True, frozen=True)
class Credentials:

    user_id: int
    hashed_password: str
