# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import sys
from pathlib import Path

from flask import Flask

from snippetbox.infrastructure.container import Container
from snippetbox.infrastructure.db import (
    build_engine,
    build_session_factory,
    init_db,
    ping_database,
)
from snippetbox.interfaces.http.rendering import TemplateCache, human_date
from snippetbox.interfaces.http.routes import register_blueprints
from snippetbox.shared.config import AppConfig, load_config
from snippetbox.shared.logging import logger, setup_logging
from snippetbox.shared.middleware.error_handler import configure_error_handling
from snippetbox.shared.middleware.request_logger import configure_request_logging
from snippetbox.shared.middleware.security_headers import configure_security_headers

UI_DIR = Path(__file__).resolve().parent / "ui"
TEMPLATES_DIR = UI_DIR / "html"
STATIC_DIR = UI_DIR / "static"


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(debug_mode=config.debug_logging)

    engine = build_engine(config.database)
    ping_database(engine)
    if config.database.create_schema:
        init_db(engine)
    session_factory = build_session_factory(engine)

    app = Flask(
        __name__,
        static_folder=str(STATIC_DIR),
        static_url_path="/static",
        template_folder=str(TEMPLATES_DIR),
    )
    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_NAME=config.session.cookie_name,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=config.security.cookie_secure,
        SESSION_COOKIE_SAMESITE=config.security.cookie_samesite,
    )

    configure_error_handling(app)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    app.jinja_env.filters["human_date"] = human_date
    templates = TemplateCache.build(app.jinja_env, TEMPLATES_DIR)

    container = Container(config=config, session_factory=session_factory, templates=templates)
    app.session_interface = container.session_interface
    register_blueprints(app, container)
    app.extensions["snippetbox"] = container

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def main(config: AppConfig | None = None) -> int:
    config = config or load_config()
    try:
        app = create_app(config)
    except Exception:
        logger.exception("startup failed")
        return 1

    host, port = config.listen_address()
    ssl_context = None
    if config.tls.enabled():
        ssl_context = (str(config.tls.cert_file), str(config.tls.key_file))

    logger.info(f"starting server on {config.addr} tls={ssl_context is not None}")
    app.run(host=host, port=port, ssl_context=ssl_context, debug=False, use_reloader=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
