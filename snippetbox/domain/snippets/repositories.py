# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Snippet


class SnippetRepository(Protocol):
    def insert(self, title: str, content: str, expires_days: int) -> int: ...
    def get(self, snippet_id: int) -> Snippet: ...
    def latest(self, limit: int = 10) -> list[Snippet]: ...
