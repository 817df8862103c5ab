# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from snippetbox.domain.users.exceptions import InvalidCredentialsError
from snippetbox.domain.users.repositories import PasswordHasher, UserRepository


class UpdatePasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, user_id: int, current_password: str, new_password: str) -> None:
        hashed = self._users.get_password_hash(user_id)
        if hashed is None or not self._password_hasher.verify(current_password, hashed):
            raise InvalidCredentialsError()
        self._users.set_password_hash(user_id, self._password_hasher.hash(new_password))
