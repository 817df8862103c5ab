# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Form models decoded from POST bodies.

Decoding only checks shape (for example that ``expires`` is an integer).
Content rules are applied afterwards by the handlers through the embedded
``Validator`` so every failing field can be re-rendered with its message.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from snippetbox.shared.validation import Validator


class FormModel(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_by_name=True)

    _validator: Validator = PrivateAttr(default_factory=Validator)

    @property
    def field_errors(self) -> dict[str, str]:
        return self._validator.field_errors

    @property
    def non_field_errors(self) -> list[str]:
        return self._validator.non_field_errors

    def valid(self) -> bool:
        return self._validator.valid()

    def check_field(self, ok: bool, key: str, message: str) -> None:
        self._validator.check_field(ok, key, message)

    def add_field_error(self, key: str, message: str) -> None:
        self._validator.add_field_error(key, message)

    def add_non_field_error(self, message: str) -> None:
        self._validator.add_non_field_error(message)


class SnippetCreateForm(FormModel):
    title: str = ""
    content: str = ""
    expires: int = 0

    @field_validator("expires", mode="before")
    @classmethod
    def blank_expires(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return 0
        return value


class UserSignupForm(FormModel):
    name: str = ""
    email: str = ""
    password: str = ""


class UserLoginForm(FormModel):
    email: str = ""
    password: str = ""


class AccountPasswordUpdateForm(FormModel):
    current_password: str = Field(default="", alias="currentPassword")
    new_password: str = Field(default="", alias="newPassword")
    new_password_confirmation: str = Field(default="", alias="newPasswordConfirmation")


__all__ = [
    "AccountPasswordUpdateForm",
    "FormModel",
    "SnippetCreateForm",
    "UserLoginForm",
    "UserSignupForm",
]
