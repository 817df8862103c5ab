# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from http import HTTPStatus

from flask import g, make_response, redirect, request, session

from snippetbox.domain.users.repositories import UserRepository
from snippetbox.shared.logging import logger

AUTH_SESSION_KEY = "authenticatedUserID"
REDIRECT_AFTER_LOGIN_KEY = "redirectPathAfterLogin"
LOGIN_PATH = "/user/login"


@dataclass(slots=True, frozen=True)
class AuthState:
    """Authentication outcome for one request, built by ``authenticate``."""

    user_id: int = 0
    is_authenticated: bool = False


ANONYMOUS = AuthState()


def current_auth() -> AuthState:
    return getattr(g, "auth", ANONYMOUS)


def authenticate(users: UserRepository):
    """Resolve the session's user and pass it to the view as ``auth``.

    A session pointing at a user that no longer exists is treated as
    anonymous. Store failures propagate to the error handler.
    """

    def decorator(f: Callable):
        @wraps(f)
        def inner(*a, **kw):
            user_id = session.get_int(AUTH_SESSION_KEY)
            state = ANONYMOUS
            if user_id:
                if users.exists(user_id):
                    state = AuthState(user_id=user_id, is_authenticated=True)
                else:
                    logger.warning(f"auth: session references missing user={user_id}")
            g.auth = state
            kw["auth"] = state
            return f(*a, **kw)

        return inner

    return decorator


def require_authentication(f: Callable):
    @wraps(f)
    def inner(*a, **kw):
        state: AuthState = kw.get("auth") or current_auth()
        if not state.is_authenticated:
            session[REDIRECT_AFTER_LOGIN_KEY] = request.path
            logger.debug(f"auth: redirecting anonymous {request.method} {request.path} to login")
            return redirect(LOGIN_PATH, code=HTTPStatus.SEE_OTHER)

        response = make_response(f(*a, **kw))
        response.headers.add("Cache-Control", "no-store")
        return response

    return inner


__all__ = [
    "ANONYMOUS",
    "AUTH_SESSION_KEY",
    "AuthState",
    "LOGIN_PATH",
    "REDIRECT_AFTER_LOGIN_KEY",
    "authenticate",
    "current_auth",
    "require_authentication",
]
