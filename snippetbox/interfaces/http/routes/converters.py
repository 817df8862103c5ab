# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from werkzeug.routing import IntegerConverter, Map

# Largest value a signed 64-bit primary key column can hold.
MAX_RECORD_ID = 2**63 - 1


class RecordIdConverter(IntegerConverter):
    """Positive ASCII-decimal ids that fit the store's integer column.

    ``\\d`` also matches non-ASCII digits, so the pattern is spelled out.
    Anything outside ``1..MAX_RECORD_ID`` fails to match and becomes a 404.
    """

    regex = r"[0-9]+"

    def __init__(self, map: Map, *args, **kwargs) -> None:
        kwargs.setdefault("min", 1)
        kwargs.setdefault("max", MAX_RECORD_ID)
        super().__init__(map, *args, **kwargs)


__all__ = ["MAX_RECORD_ID", "RecordIdConverter"]
