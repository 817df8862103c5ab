# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Page rendering from a template cache compiled once at startup."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any

from flask import Response, session
from jinja2 import Environment, Template

from snippetbox.auth import AuthState
from snippetbox.domain.snippets.entities import Snippet
from snippetbox.domain.users.entities import User
from snippetbox.shared.errors import TemplateNotFoundError
from snippetbox.shared.logging import logger
from snippetbox.shared.middleware.csrf import get_csrf_token

PAGES_DIR = "pages"
FLASH_SESSION_KEY = "flash"


def human_date(value: datetime | None) -> str:
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%d %b %Y at %H:%M")


@dataclass(slots=True)
class TemplateData:
    current_year: int
    is_authenticated: bool = False
    flash: str = ""
    csrf_token: str = ""
    form: Any = None
    snippet: Snippet | None = None
    snippets: list[Snippet] = field(default_factory=list)
    user: User | None = None

    def as_context(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def new_template_data(auth: AuthState) -> TemplateData:
    """Defaults every page needs; pops the one-shot flash message."""
    return TemplateData(
        current_year=datetime.now(UTC).year,
        is_authenticated=auth.is_authenticated,
        flash=session.pop_string(FLASH_SESSION_KEY),
        csrf_token=get_csrf_token(),
    )


class TemplateCache(Mapping[str, Template]):
    """Immutable page name -> compiled template mapping."""

    def __init__(self, templates: Mapping[str, Template]) -> None:
        self._templates = MappingProxyType(dict(templates))

    @classmethod
    def build(cls, env: Environment, templates_dir: Path) -> TemplateCache:
        pages = sorted((templates_dir / PAGES_DIR).glob("*.html"))
        compiled = {page.name: env.get_template(f"{PAGES_DIR}/{page.name}") for page in pages}
        logger.info(f"templates: compiled {len(compiled)} pages")
        return cls(compiled)

    def __getitem__(self, page: str) -> Template:
        return self._templates[page]

    def __iter__(self):
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


class TemplateRenderer:
    def __init__(self, cache: Mapping[str, Template]) -> None:
        self._cache = cache

    def render(self, status: int, page: str, data: TemplateData) -> Response:
        template = self._cache.get(page)
        if template is None:
            raise TemplateNotFoundError(page)

        # Render to a string first: a template error must never reach the client half-written.
        body = template.render(data.as_context())
        return Response(body, status=status, mimetype="text/html")


__all__ = [
    "TemplateCache",
    "TemplateData",
    "TemplateRenderer",
    "human_date",
    "new_template_data",
]
