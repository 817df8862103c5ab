# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; style-src 'self' fonts.googleapis.com; font-src fonts.gstatic.com"
)


def configure_security_headers(app: Flask, *, enable_hsts: bool = False) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        resp.headers["Referrer-Policy"] = "origin-when-cross-origin"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "deny"
        resp.headers["X-XSS-Protection"] = "0"

        if enable_hsts:
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return resp


__all__ = ["CONTENT_SECURITY_POLICY", "configure_security_headers"]
