# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from snippetbox.shared.errors.base import DomainError


class NoRecordError(DomainError):
    """No matching record, or the record is no longer visible."""

    code = "no_record"
    status = HTTPStatus.NOT_FOUND
