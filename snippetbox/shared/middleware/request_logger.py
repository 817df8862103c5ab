# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from snippetbox.shared.logging import clear_correlation_id, logger, set_correlation_id


def _get_client_ip() -> str:
    return request.remote_addr or "unknown"


def _request_uri() -> str:
    return request.full_path.rstrip("?")


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get("X-Request-ID") or secrets.token_urlsafe(8))
        g.request_start_time = time.perf_counter()

        logger.info(
            f"{_get_client_ip()} - {request.environ.get('SERVER_PROTOCOL', 'HTTP/1.1')} "
            f"{request.method} {_request_uri()}"
        )

    @app.after_request
    def _after_request(response: Response) -> Response:
        if debug_mode:
            start_time = getattr(g, "request_start_time", time.perf_counter())
            duration = time.perf_counter() - start_time
            logger.debug(
                f"Response: {request.method} {request.path} "
                f"status={response.status_code}, duration={duration:.3f}s"
            )
        return response

    @app.teardown_request
    def _teardown_request(_exc: BaseException | None) -> None:
        clear_correlation_id()


__all__ = ["configure_request_logging"]
