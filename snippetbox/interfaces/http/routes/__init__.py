# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from snippetbox.infrastructure.container import Container

from .converters import MAX_RECORD_ID, RecordIdConverter


def register_blueprints(app: Flask, container: Container) -> None:
    app.url_map.converters["record_id"] = RecordIdConverter
    for controller in container.controllers():
        app.register_blueprint(controller.as_blueprint())


__all__ = ["MAX_RECORD_ID", "RecordIdConverter", "register_blueprints"]
