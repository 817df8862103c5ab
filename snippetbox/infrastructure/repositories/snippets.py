# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from snippetbox.domain.exceptions import NoRecordError
from snippetbox.domain.snippets.entities import Snippet as DomainSnippet
from snippetbox.domain.snippets.repositories import SnippetRepository
from snippetbox.infrastructure.db.models import Snippet, as_utc
from snippetbox.infrastructure.unit_of_work import unit_of_work_scope
from snippetbox.shared.logging import logger

LATEST_LIMIT = 10


def _to_domain(row: Snippet) -> DomainSnippet:
    return DomainSnippet(
        id=row.id,
        title=row.title,
        content=row.content,
        created=as_utc(row.created),
        expires=as_utc(row.expires),
    )


class SqlAlchemySnippetRepository(SnippetRepository):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def insert(self, title: str, content: str, expires_days: int) -> int:
        created = self._clock()
        row = Snippet(
            title=title,
            content=content,
            created=created,
            expires=created + timedelta(days=expires_days),
        )
        with unit_of_work_scope(self._session_factory) as session:
            session.add(row)
            session.flush()
            snippet_id = row.id
        logger.info(f"snippets.insert: id={snippet_id} expires_days={expires_days}")
        return snippet_id

    def get(self, snippet_id: int) -> DomainSnippet:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(Snippet)
                .filter(Snippet.id == snippet_id, Snippet.expires > self._clock())
                .first()
            )
            if row is None:
                raise NoRecordError(context={"snippet_id": snippet_id})
            return _to_domain(row)

    def latest(self, limit: int = LATEST_LIMIT) -> list[DomainSnippet]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = (
                session.query(Snippet)
                .filter(Snippet.expires > self._clock())
                .order_by(Snippet.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_domain(row) for row in rows]
