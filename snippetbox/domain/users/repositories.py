# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Credentials, User


class UserRepository(Protocol):
    def add(self, name: str, email: str, hashed_password: str) -> int: ...
    def find_credentials(self, email: str) -> Credentials | None: ...
    def exists(self, user_id: int) -> bool: ...
    def get(self, user_id: int) -> User: ...
    def get_password_hash(self, user_id: int) -> str | None: ...
    def set_password_hash(self, user_id: int, hashed_password: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
