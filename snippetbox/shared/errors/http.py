# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, request
from werkzeug.exceptions import HTTPException

from snippetbox.shared.logging import logger

from .base import AppError


def _client_ip() -> str:
    return request.remote_addr or "unknown"


def client_error(status: int | HTTPStatus) -> Response:
    """Plain-text status line, the same body for every client error."""
    status = HTTPStatus(status)
    response = Response(f"{status.phrase}\n", status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def not_found() -> Response:
    return client_error(HTTPStatus.NOT_FOUND)


def server_error(exc: BaseException) -> Response:
    logger.opt(exception=exc).error(
        f"Unhandled exception: {request.method} {request.full_path.rstrip('?')} "
        f"from {_client_ip()}: {exc!r}"
    )
    response = client_error(HTTPStatus.INTERNAL_SERVER_ERROR)
    response.headers["Connection"] = "close"
    return response


def handle_app_error(error: AppError) -> Response:
    if error.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return server_error(error)
    logger.warning(
        f"Handled application error {error.code} on {request.method} {request.path}"
    )
    return client_error(error.status)


def register_error_handler(app: Flask) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        return handle_app_error(exc)

    @app.errorhandler(404)
    def _handle_not_found(_exc: HTTPException):
        return not_found()

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        if exc.code is None or exc.code == HTTPStatus.METHOD_NOT_ALLOWED:
            return exc
        if exc.code >= HTTPStatus.INTERNAL_SERVER_ERROR:
            # Failures outside view dispatch (session load or save, hooks)
            # arrive wrapped in InternalServerError.
            return server_error(getattr(exc, "original_exception", None) or exc)
        if exc.response is not None:
            return exc.response
        return client_error(exc.code)

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        return server_error(exc)


__all__ = [
    "client_error",
    "handle_app_error",
    "not_found",
    "register_error_handler",
    "server_error",
]
