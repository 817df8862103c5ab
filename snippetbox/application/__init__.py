# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .use_cases.users.authenticate_user import AuthenticateUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.update_password import UpdatePasswordUseCase

__all__ = [
    "AuthenticateUserUseCase",
    "RegisterUserUseCase",
    "UpdatePasswordUseCase",
    "WerkzeugPasswordHasher",
]
