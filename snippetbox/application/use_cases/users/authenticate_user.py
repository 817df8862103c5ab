# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from snippetbox.domain.users.exceptions import InvalidCredentialsError
from snippetbox.domain.users.repositories import PasswordHasher, UserRepository
from snippetbox.shared.logging import logger


class AuthenticateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> int:
        """Return the user id for valid credentials.

        An unknown email and a wrong password raise the same
        ``InvalidCredentialsError`` so callers cannot tell which one failed.
        Store errors propagate unchanged.
        """
        credentials = self._users.find_credentials(email)
        if credentials is None or not self._password_hasher.verify(
            password, credentials.hashed_password
        ):
            logger.info("auth.authenticate: invalid credentials")
            raise InvalidCredentialsError()
        return credentials.user_id
