# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, redirect, request, session

from snippetbox.auth import AuthState
from snippetbox.domain.exceptions import NoRecordError
from snippetbox.domain.snippets.repositories import SnippetRepository
from snippetbox.interfaces.http.dto.forms import SnippetCreateForm
from snippetbox.interfaces.http.rendering import (
    FLASH_SESSION_KEY,
    TemplateRenderer,
    new_template_data,
)
from snippetbox.shared.errors import decode_post_form, not_found
from snippetbox.shared.logging import logger
from snippetbox.shared.middleware.chain import Chain
from snippetbox.shared.validation import max_chars, not_blank, permitted_value

EXPIRY_CHOICES = (1, 7, 365)
DEFAULT_EXPIRES = 365


class SnippetsController:
    def __init__(
        self,
        *,
        snippets: SnippetRepository,
        renderer: TemplateRenderer,
        dynamic: Chain,
        protected: Chain,
    ) -> None:
        self._snippets = snippets
        self._renderer = renderer
        self._dynamic = dynamic
        self._protected = protected

    def home(self, *, auth: AuthState) -> Response:
        data = new_template_data(auth)
        data.snippets = self._snippets.latest()
        return self._renderer.render(HTTPStatus.OK, "home.html", data)

    def view(self, snippet_id: int, *, auth: AuthState) -> Response:
        try:
            snippet = self._snippets.get(snippet_id)
        except NoRecordError:
            return not_found()

        data = new_template_data(auth)
        data.snippet = snippet
        return self._renderer.render(HTTPStatus.OK, "view.html", data)

    def create(self, *, auth: AuthState) -> Response:
        data = new_template_data(auth)
        data.form = SnippetCreateForm(expires=DEFAULT_EXPIRES)
        return self._renderer.render(HTTPStatus.OK, "create.html", data)

    def create_post(self, *, auth: AuthState) -> Response:
        form = decode_post_form(SnippetCreateForm, request.form)

        form.check_field(not_blank(form.title), "title", "This field cannot be blank")
        form.check_field(
            max_chars(form.title, 100),
            "title",
            "This field cannot be more than 100 characters long",
        )
        form.check_field(not_blank(form.content), "content", "This field cannot be blank")
        form.check_field(
            permitted_value(form.expires, *EXPIRY_CHOICES),
            "expires",
            "This field must equal 1, 7, or 365",
        )

        if not form.valid():
            data = new_template_data(auth)
            data.form = form
            return self._renderer.render(HTTPStatus.UNPROCESSABLE_ENTITY, "create.html", data)

        snippet_id = self._snippets.insert(form.title, form.content, form.expires)
        session[FLASH_SESSION_KEY] = "Snippet created successfully!"
        logger.info(f"snippets.create: user={auth.user_id} id={snippet_id}")
        return redirect(f"/snippet/view/{snippet_id}", code=HTTPStatus.SEE_OTHER)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("snippets", __name__)
        bp.add_url_rule("/", view_func=self._dynamic.then(self.home), methods=["GET"])
        bp.add_url_rule(
            "/snippet/view/<record_id:snippet_id>",
            view_func=self._dynamic.then(self.view),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/snippet/create", view_func=self._protected.then(self.create), methods=["GET"]
        )
        bp.add_url_rule(
            "/snippet/create",
            view_func=self._protected.then(self.create_post),
            methods=["POST"],
        )
        return bp
