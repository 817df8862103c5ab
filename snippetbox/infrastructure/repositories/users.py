# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from snippetbox.domain.exceptions import NoRecordError
from snippetbox.domain.users.entities import Credentials
from snippetbox.domain.users.entities import User as DomainUser
from snippetbox.domain.users.exceptions import DuplicateEmailError
from snippetbox.domain.users.repositories import UserRepository
from snippetbox.infrastructure.db.models import User, as_utc
from snippetbox.infrastructure.unit_of_work import unit_of_work_scope
from snippetbox.shared.logging import logger

# SQLite reports the column, MySQL and PostgreSQL report the constraint name.
_EMAIL_CONSTRAINT_MARKERS = ("users_uc_email", "users.email")


def is_duplicate_email(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _EMAIL_CONSTRAINT_MARKERS)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def add(self, name: str, email: str, hashed_password: str) -> int:
        row = User(
            name=name,
            email=email,
            hashed_password=hashed_password,
            created=datetime.now(UTC),
        )
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.add(row)
                session.flush()
                user_id = row.id
        except IntegrityError as exc:
            if is_duplicate_email(exc):
                raise DuplicateEmailError() from exc
            raise
        logger.info(f"users.add: id={user_id}")
        return user_id

    def find_credentials(self, email: str) -> Credentials | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(User.id, User.hashed_password)
                .filter(User.email == email)
                .first()
            )
        if row is None:
            return None
        return Credentials(user_id=row.id, hashed_password=row.hashed_password)

    def exists(self, user_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return session.query(User.id).filter(User.id == user_id).first() is not None

    def get(self, user_id: int) -> DomainUser:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                raise NoRecordError(context={"user_id": user_id})
            return DomainUser(
                id=row.id,
                name=row.name,
                email=row.email,
                created=as_utc(row.created),
            )

    def get_password_hash(self, user_id: int) -> str | None:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalar(
                select(User.hashed_password).where(User.id == user_id)
            )

    def set_password_hash(self, user_id: int, hashed_password: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(User)
                .where(User.id == user_id)
                .values(hashed_password=hashed_password)
            )
        logger.info(f"users.password_update: id={user_id}")
