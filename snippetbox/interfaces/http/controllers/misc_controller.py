# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response

from snippetbox.auth import AuthState
from snippetbox.interfaces.http.rendering import TemplateRenderer, new_template_data
from snippetbox.shared.middleware.chain import Chain


class MiscController:
    def __init__(self, *, renderer: TemplateRenderer, dynamic: Chain) -> None:
        self._renderer = renderer
        self._dynamic = dynamic

    def ping(self) -> Response:
        return Response("OK", mimetype="text/plain")

    def about(self, *, auth: AuthState) -> Response:
        return self._renderer.render(HTTPStatus.OK, "about.html", new_template_data(auth))

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/ping", view_func=self.ping, methods=["GET"])
        bp.add_url_rule("/about", view_func=self._dynamic.then(self.about), methods=["GET"])
        return bp
