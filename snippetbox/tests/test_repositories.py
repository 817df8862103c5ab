from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select

from snippetbox.domain.exceptions import NoRecordError
from snippetbox.domain.users.exceptions import DuplicateEmailError
from snippetbox.infrastructure.db.models import User
from snippetbox.infrastructure.repositories.snippets import SqlAlchemySnippetRepository
from snippetbox.infrastructure.repositories.users import SqlAlchemyUserRepository
from snippetbox.infrastructure.unit_of_work import unit_of_work_scope


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 3, 17, 10, 15, tzinfo=UTC))


@pytest.fixture()
def snippets(session_factory, clock: FrozenClock) -> SqlAlchemySnippetRepository:
    return SqlAlchemySnippetRepository(session_factory, clock=clock)


@pytest.fixture()
def users(session_factory) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(session_factory)


def test_insert_returns_positive_id_and_get_round_trips(snippets) -> None:
    snippet_id = snippets.insert("O snail", "Climb Mount Fuji", 7)

    snippet = snippets.get(snippet_id)

    assert snippet_id > 0
    assert snippet.title == "O snail"
    assert snippet.content == "Climb Mount Fuji"


def test_one_day_expiry_is_exactly_one_day(snippets) -> None:
    snippet = snippets.get(snippets.insert("t", "c", 1))

    assert snippet.expires - snippet.created == timedelta(days=1)
    assert snippet.created.tzinfo is not None


def test_expired_snippet_looks_like_missing(snippets, clock: FrozenClock) -> None:
    snippet_id = snippets.insert("t", "c", 1)
    clock.advance(timedelta(days=1, seconds=1))

    with pytest.raises(NoRecordError) as expired:
        snippets.get(snippet_id)
    with pytest.raises(NoRecordError) as missing:
        snippets.get(snippet_id + 1000)

    assert expired.value.code == missing.value.code == "no_record"


def test_latest_is_newest_first_limited_and_unexpired(snippets, clock: FrozenClock) -> None:
    short_lived = snippets.insert("short", "c", 1)
    ids = [snippets.insert(f"s{i}", "c", 365) for i in range(11)]
    clock.advance(timedelta(days=2))

    latest = snippets.latest()

    assert [s.id for s in latest] == list(reversed(ids))[:10]
    assert short_lived not in [s.id for s in latest]


def test_add_user_and_duplicate_email(users) -> None:
    user_id = users.add("Alice", "alice@example.com", "hash")
    assert user_id > 0

    with pytest.raises(DuplicateEmailError):
        users.add("Other", "alice@example.com", "hash")


def test_exists_and_get(users) -> None:
    user_id = users.add("Alice", "alice@example.com", "hash")

    assert users.exists(user_id)
    assert not users.exists(user_id + 1)

    user = users.get(user_id)
    assert (user.id, user.name, user.email) == (user_id, "Alice", "alice@example.com")
    assert not hasattr(user, "hashed_password")

    with pytest.raises(NoRecordError):
        users.get(user_id + 1)


def test_find_credentials(users) -> None:
    user_id = users.add("Alice", "alice@example.com", "hash")

    credentials = users.find_credentials("alice@example.com")

    assert credentials is not None
    assert credentials.user_id == user_id
    assert credentials.hashed_password == "hash"
    assert users.find_credentials("nobody@example.com") is None


def test_set_password_hash_replaces_stored_hash(users, session_factory) -> None:
    user_id = users.add("Alice", "alice@example.com", "old")

    users.set_password_hash(user_id, "new")

    assert users.get_password_hash(user_id) == "new"
    assert users.get_password_hash(user_id + 1) is None
    with unit_of_work_scope(session_factory) as session:
        stored = session.scalar(select(User.hashed_password).where(User.id == user_id))
    assert stored == "new"
