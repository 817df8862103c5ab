# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container.

One container is built per Flask app, after the template cache, so tests can
run several isolated apps side by side.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import timedelta
from functools import cached_property

from jinja2 import Template
from sqlalchemy.orm import Session

from snippetbox.application.services.password_hashing import WerkzeugPasswordHasher
from snippetbox.application.use_cases.users.authenticate_user import (
    AuthenticateUserUseCase,
)
from snippetbox.application.use_cases.users.register_user import RegisterUserUseCase
from snippetbox.application.use_cases.users.update_password import UpdatePasswordUseCase
from snippetbox.auth import authenticate, require_authentication
from snippetbox.infrastructure.repositories.snippets import SqlAlchemySnippetRepository
from snippetbox.infrastructure.repositories.users import SqlAlchemyUserRepository
from snippetbox.infrastructure.sessions import SqlAlchemySessionInterface
from snippetbox.interfaces.http.controllers.account_controller import AccountController
from snippetbox.interfaces.http.controllers.misc_controller import MiscController
from snippetbox.interfaces.http.controllers.snippets_controller import SnippetsController
from snippetbox.interfaces.http.controllers.users_controller import UsersController
from snippetbox.interfaces.http.rendering import TemplateRenderer
from snippetbox.shared.config import AppConfig
from snippetbox.shared.middleware.chain import Chain
from snippetbox.shared.middleware.csrf import csrf_protect


class Container:
    def __init__(
        self,
        *,
        config: AppConfig,
        session_factory: Callable[[], Session],
        templates: Mapping[str, Template],
    ) -> None:
        self.config = config
        self.session_factory = session_factory
        self.templates = templates

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def snippet_repository(self) -> SqlAlchemySnippetRepository:
        return SqlAlchemySnippetRepository(self.session_factory)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def update_password_use_case(self) -> UpdatePasswordUseCase:
        return UpdatePasswordUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def session_interface(self) -> SqlAlchemySessionInterface:
        return SqlAlchemySessionInterface(
            self.session_factory,
            lifetime=timedelta(seconds=self.config.session.lifetime),
        )

    @cached_property
    def renderer(self) -> TemplateRenderer:
        return TemplateRenderer(self.templates)

    @cached_property
    def dynamic_chain(self) -> Chain:
        return Chain(csrf_protect, authenticate(self.user_repository))

    @cached_property
    def protected_chain(self) -> Chain:
        return self.dynamic_chain.append(require_authentication)

    @cached_property
    def snippets_controller(self) -> SnippetsController:
        return SnippetsController(
            snippets=self.snippet_repository,
            renderer=self.renderer,
            dynamic=self.dynamic_chain,
            protected=self.protected_chain,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            authenticate_use_case=self.authenticate_user_use_case,
            renderer=self.renderer,
            dynamic=self.dynamic_chain,
            protected=self.protected_chain,
        )

    @cached_property
    def account_controller(self) -> AccountController:
        return AccountController(
            users=self.user_repository,
            update_password_use_case=self.update_password_use_case,
            renderer=self.renderer,
            protected=self.protected_chain,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(renderer=self.renderer, dynamic=self.dynamic_chain)

    def controllers(self) -> list:
        return [
            self.misc_controller,
            self.snippets_controller,
            self.users_controller,
            self.account_controller,
        ]
