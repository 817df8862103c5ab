# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from snippetbox.shared.errors.base import DomainError


class DuplicateEmailError(DomainError):
    code = "duplicate_email"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNPROCESSABLE_ENTITY
