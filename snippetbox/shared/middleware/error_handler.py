# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from snippetbox.shared.errors import register_error_handler


def configure_error_handling(app: Flask) -> None:
    """Install the recovery layer.

    Failures raised while opening or saving the session never reach the WSGI
    server, even with ``TESTING`` or ``DEBUG`` set. They end as the same plain
    500 a failing view produces.
    """
    app.config["PROPAGATE_EXCEPTIONS"] = False
    register_error_handler(app)


__all__ = ["configure_error_handling"]
