# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, redirect, request, session

from snippetbox.application.use_cases.users.authenticate_user import (
    AuthenticateUserUseCase,
)
from snippetbox.application.use_cases.users.register_user import RegisterUserUseCase
from snippetbox.auth import AUTH_SESSION_KEY, LOGIN_PATH, REDIRECT_AFTER_LOGIN_KEY, AuthState
from snippetbox.domain.users.exceptions import DuplicateEmailError, InvalidCredentialsError
from snippetbox.interfaces.http.dto.forms import UserLoginForm, UserSignupForm
from snippetbox.interfaces.http.rendering import (
    FLASH_SESSION_KEY,
    TemplateRenderer,
    new_template_data,
)
from snippetbox.shared.errors import decode_post_form
from snippetbox.shared.logging import logger
from snippetbox.shared.middleware.chain import Chain
from snippetbox.shared.validation import EMAIL_RX, matches, min_chars, not_blank

MIN_PASSWORD_CHARS = 8
AFTER_LOGIN_PATH = "/snippet/create"


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        authenticate_use_case: AuthenticateUserUseCase,
        renderer: TemplateRenderer,
        dynamic: Chain,
        protected: Chain,
    ) -> None:
        self._register_use_case = register_use_case
        self._authenticate_use_case = authenticate_use_case
        self._renderer = renderer
        self._dynamic = dynamic
        self._protected = protected

    def _render_form(self, status: int, page: str, form, auth: AuthState) -> Response:
        data = new_template_data(auth)
        data.form = form
        return self._renderer.render(status, page, data)

    def signup(self, *, auth: AuthState) -> Response:
        return self._render_form(HTTPStatus.OK, "signup.html", UserSignupForm(), auth)

    def signup_post(self, *, auth: AuthState) -> Response:
        form = decode_post_form(UserSignupForm, request.form)

        form.check_field(not_blank(form.name), "name", "This field cannot be blank")
        form.check_field(not_blank(form.email), "email", "This field cannot be blank")
        form.check_field(
            matches(form.email, EMAIL_RX), "email", "This field must be a valid email address"
        )
        form.check_field(not_blank(form.password), "password", "This field cannot be blank")
        form.check_field(
            min_chars(form.password, MIN_PASSWORD_CHARS),
            "password",
            "This field must be at least 8 characters long",
        )

        if not form.valid():
            return self._render_form(HTTPStatus.UNPROCESSABLE_ENTITY, "signup.html", form, auth)

        try:
            user_id = self._register_use_case.execute(form.name, form.email, form.password)
        except DuplicateEmailError:
            logger.info("auth.signup: duplicate email")
            form.add_field_error("email", "Email address already in use")
            return self._render_form(HTTPStatus.UNPROCESSABLE_ENTITY, "signup.html", form, auth)

        logger.info(f"auth.signup: ok user_id={user_id}")
        session[FLASH_SESSION_KEY] = "Your signup was successful. Please log in."
        return redirect(LOGIN_PATH, code=HTTPStatus.SEE_OTHER)

    def login(self, *, auth: AuthState) -> Response:
        return self._render_form(HTTPStatus.OK, "login.html", UserLoginForm(), auth)

    def login_post(self, *, auth: AuthState) -> Response:
        form = decode_post_form(UserLoginForm, request.form)

        form.check_field(not_blank(form.email), "email", "This field cannot be blank")
        form.check_field(
            matches(form.email, EMAIL_RX), "email", "This field must be a valid email address"
        )
        form.check_field(not_blank(form.password), "password", "This field cannot be blank")

        if not form.valid():
            return self._render_form(HTTPStatus.UNPROCESSABLE_ENTITY, "login.html", form, auth)

        try:
            user_id = self._authenticate_use_case.execute(form.email, form.password)
        except InvalidCredentialsError:
            form.add_non_field_error("Email or password is incorrect")
            return self._render_form(HTTPStatus.UNPROCESSABLE_ENTITY, "login.html", form, auth)

        # Privilege change: new token before storing the identity.
        session.renew_token()
        session[AUTH_SESSION_KEY] = user_id
        logger.info(f"auth.login: ok user_id={user_id}")

        next_path = session.pop_string(REDIRECT_AFTER_LOGIN_KEY)
        return redirect(next_path or AFTER_LOGIN_PATH, code=HTTPStatus.SEE_OTHER)

    def logout_post(self, *, auth: AuthState) -> Response:
        session.renew_token()
        session.pop(AUTH_SESSION_KEY, None)
        session[FLASH_SESSION_KEY] = "You have been logged out successfully"
        logger.info(f"auth.logout: ok user_id={auth.user_id}")
        return redirect("/", code=HTTPStatus.SEE_OTHER)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/user")
        bp.add_url_rule("/signup", view_func=self._dynamic.then(self.signup), methods=["GET"])
        bp.add_url_rule(
            "/signup", view_func=self._dynamic.then(self.signup_post), methods=["POST"]
        )
        bp.add_url_rule("/login", view_func=self._dynamic.then(self.login), methods=["GET"])
        bp.add_url_rule(
            "/login", view_func=self._dynamic.then(self.login_post), methods=["POST"]
        )
        bp.add_url_rule(
            "/logout", view_func=self._protected.then(self.logout_post), methods=["POST"]
        )
        return bp
