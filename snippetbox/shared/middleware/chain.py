# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Composable view decorators.

``Chain(a, b).then(view)`` is ``a(b(view))``: the first middleware listed is
the outermost one.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

View = Callable[..., Any]
Middleware = Callable[[View], View]


class Chain:
    def __init__(self, *middlewares: Middleware) -> None:
        self._middlewares: tuple[Middleware, ...] = middlewares

    def append(self, *middlewares: Middleware) -> Chain:
        return Chain(*self._middlewares, *middlewares)

    def then(self, view: View) -> View:
        for middleware in reversed(self._middlewares):
            view = middleware(view)
        return view

    def __len__(self) -> int:
        return len(self._middlewares)


__all__ = ["Chain", "Middleware", "View"]
