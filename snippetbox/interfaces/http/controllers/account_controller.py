# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, redirect, request, session

from snippetbox.application.use_cases.users.update_password import UpdatePasswordUseCase
from snippetbox.auth import LOGIN_PATH, AuthState
from snippetbox.domain.exceptions import NoRecordError
from snippetbox.domain.users.exceptions import InvalidCredentialsError
from snippetbox.domain.users.repositories import UserRepository
from snippetbox.interfaces.http.dto.forms import AccountPasswordUpdateForm
from snippetbox.interfaces.http.rendering import (
    FLASH_SESSION_KEY,
    TemplateRenderer,
    new_template_data,
)
from snippetbox.shared.errors import decode_post_form
from snippetbox.shared.logging import logger
from snippetbox.shared.middleware.chain import Chain
from snippetbox.shared.validation import min_chars, not_blank


class AccountController:
    def __init__(
        self,
        *,
        users: UserRepository,
        update_password_use_case: UpdatePasswordUseCase,
        renderer: TemplateRenderer,
        protected: Chain,
    ) -> None:
        self._users = users
        self._update_password_use_case = update_password_use_case
        self._renderer = renderer
        self._protected = protected

    def view(self, *, auth: AuthState) -> Response:
        try:
            user = self._users.get(auth.user_id)
        except NoRecordError:
            return redirect(LOGIN_PATH, code=HTTPStatus.SEE_OTHER)

        data = new_template_data(auth)
        data.user = user
        return self._renderer.render(HTTPStatus.OK, "account.html", data)

    def password_update(self, *, auth: AuthState) -> Response:
        data = new_template_data(auth)
        data.form = AccountPasswordUpdateForm()
        return self._renderer.render(HTTPStatus.OK, "password.html", data)

    def password_update_post(self, *, auth: AuthState) -> Response:
        form = decode_post_form(AccountPasswordUpdateForm, request.form)

        form.check_field(
            not_blank(form.current_password), "currentPassword", "This field cannot be blank"
        )
        form.check_field(not_blank(form.new_password), "newPassword", "This field cannot be blank")
        form.check_field(
            not_blank(form.new_password_confirmation),
            "newPasswordConfirmation",
            "This field cannot be blank",
        )
        form.check_field(
            min_chars(form.new_password, 8),
            "newPassword",
            "This field must be at least 8 characters long",
        )
        form.check_field(
            form.new_password == form.new_password_confirmation,
            "newPasswordConfirmation",
            "Passwords must match",
        )

        if form.valid():
            try:
                self._update_password_use_case.execute(
                    auth.user_id, form.current_password, form.new_password
                )
            except InvalidCredentialsError:
                form.add_non_field_error("Email or password is incorrect")

        if not form.valid():
            data = new_template_data(auth)
            data.form = form
            return self._renderer.render(HTTPStatus.UNPROCESSABLE_ENTITY, "password.html", data)

        logger.info(f"account.password: updated user_id={auth.user_id}")
        session[FLASH_SESSION_KEY] = "Your password has been updated."
        return redirect("/account/view", code=HTTPStatus.SEE_OTHER)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("account", __name__, url_prefix="/account")
        bp.add_url_rule("/view", view_func=self._protected.then(self.view), methods=["GET"])
        bp.add_url_rule(
            "/password/update",
            view_func=self._protected.then(self.password_update),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/password/update",
            view_func=self._protected.then(self.password_update_post),
            methods=["POST"],
        )
        return bp
