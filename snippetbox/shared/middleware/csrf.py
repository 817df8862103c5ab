# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from functools import wraps

from flask import abort, request, session

from snippetbox.shared.logging import logger

SAFE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS", "TRACE")
CSRF_SESSION_KEY = "csrf_token"
CSRF_FORM_FIELD = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"


def get_csrf_token() -> str:
    """Return the session's CSRF token, creating it on first use."""
    token = session.get(CSRF_SESSION_KEY)
    if not isinstance(token, str) or not token:
        token = secrets.token_urlsafe(32)
        session[CSRF_SESSION_KEY] = token
    return token


def _submitted_token() -> str:
    token = request.form.get(CSRF_FORM_FIELD) or request.headers.get(CSRF_HEADER) or ""
    return token.strip()


def csrf_protect(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if request.method in SAFE_METHODS:
            return f(*args, **kwargs)
        expected = session.get(CSRF_SESSION_KEY)
        submitted = _submitted_token()
        if (
            not isinstance(expected, str)
            or not expected
            or not submitted
            or not secrets.compare_digest(expected.encode(), submitted.encode())
        ):
            logger.warning(f"csrf: rejected {request.method} {request.path}")
            abort(400)
        return f(*args, **kwargs)

    return wrapper


__all__ = ["CSRF_FORM_FIELD", "SAFE_METHODS", "csrf_protect", "get_csrf_token"]
