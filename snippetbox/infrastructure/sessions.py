# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side sessions stored in the ``sessions`` table.

The cookie carries an opaque token only. Session data lives in the database
and expires at an absolute deadline fixed when the session is created.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from flask import Flask, Request, Response
from flask.sessions import SessionInterface, SessionMixin
from sqlalchemy import delete
from sqlalchemy.orm import Session
from werkzeug.datastructures import CallbackDict

from snippetbox.infrastructure.db.models import SessionRecord, as_utc
from snippetbox.infrastructure.unit_of_work import unit_of_work_scope
from snippetbox.shared.logging import logger


def new_token() -> str:
    return secrets.token_urlsafe(32)


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(
        self,
        initial: dict[str, Any] | None = None,
        *,
        token: str,
        deadline: datetime,
        new: bool = False,
    ) -> None:
        def on_update(session: ServerSideSession) -> None:
            session.modified = True
            session.accessed = True

        super().__init__(initial, on_update)
        self.token = token
        self.deadline = deadline
        self.new = new
        self.modified = False
        self.accessed = False
        self.previous_token: str | None = None

    def __getitem__(self, key: str) -> Any:
        self.accessed = True
        return super().__getitem__(key)

    def get(self, key: str, default: Any = None) -> Any:
        self.accessed = True
        return super().get(key, default)

    def setdefault(self, key: str, default: Any = None) -> Any:
        self.accessed = True
        return super().setdefault(key, default)

    def get_int(self, key: str) -> int:
        value = self.get(key)
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    def pop_string(self, key: str) -> str:
        """Remove ``key`` and return it, or ``""`` when absent or not a string."""
        self.accessed = True
        if key not in self:
            return ""
        value = self.pop(key)
        return value if isinstance(value, str) else ""

    def renew_token(self) -> None:
        """Issue a new token for the same data.

        Called whenever the privilege level changes (login, logout). The old
        record is deleted when the session is saved.
        """
        if self.previous_token is None and not self.new:
            self.previous_token = self.token
        self.token = new_token()
        self.modified = True
        self.accessed = True


class SqlAlchemySessionInterface(SessionInterface):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        lifetime: timedelta,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._session_factory = session_factory
        self._lifetime = lifetime
        self._clock = clock

    def _new_session(self) -> ServerSideSession:
        return ServerSideSession(
            token=new_token(),
            deadline=self._clock() + self._lifetime,
            new=True,
        )

    def open_session(self, app: Flask, request: Request) -> ServerSideSession:
        token = request.cookies.get(self.get_cookie_name(app))
        if not token:
            return self._new_session()

        with unit_of_work_scope(self._session_factory) as db:
            record = (
                db.query(SessionRecord)
                .filter(SessionRecord.token == token, SessionRecord.expiry > self._clock())
                .first()
            )
            if record is None:
                return self._new_session()
            return ServerSideSession(
                dict(record.data or {}),
                token=record.token,
                deadline=as_utc(record.expiry),
            )

    def save_session(
        self, app: Flask, session: SessionMixin, response: Response
    ) -> None:
        if not isinstance(session, ServerSideSession):
            # Null session: opening failed or was never attempted.
            return
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.accessed:
            response.vary.add("Cookie")

        if not session.modified:
            return

        with unit_of_work_scope(self._session_factory) as db:
            if session.previous_token is not None:
                db.execute(delete(SessionRecord).where(SessionRecord.token == session.previous_token))
            if not session:
                db.execute(delete(SessionRecord).where(SessionRecord.token == session.token))
            else:
                db.merge(
                    SessionRecord(
                        token=session.token,
                        data=dict(session),
                        expiry=session.deadline,
                    )
                )

        if session.previous_token is not None:
            logger.debug("session: token renewed")
        session.previous_token = None

        if not session:
            if not session.new:
                response.delete_cookie(name, domain=domain, path=path)
            return

        response.set_cookie(
            name,
            session.token,
            expires=session.deadline,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )


__all__ = ["ServerSideSession", "SqlAlchemySessionInterface", "new_token"]
