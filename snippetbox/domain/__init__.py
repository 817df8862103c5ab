# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import NoRecordError
from .snippets.entities import Snippet
from .users.entities import User
from .users.exceptions import DuplicateEmailError, InvalidCredentialsError

__all__ = [
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "NoRecordError",
    "Snippet",
    "User",
]
