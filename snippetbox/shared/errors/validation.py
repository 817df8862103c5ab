# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import BadRequestError

FormT = TypeVar("FormT", bound=BaseModel)


class InvalidDecoderError(TypeError):
    """Raised when a form is decoded into something that is not a form model.

    This is a programming error, never a user condition, so nothing catches
    it on the way to the recovery handler.
    """


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def raise_bad_request(exc: PydanticValidationError) -> None:
    context = format_pydantic_errors(exc)
    raise BadRequestError("form_decode_error", context=context) from exc


def decode_post_form(form_cls: type[FormT], data: Mapping[str, Any]) -> FormT:
    if not (isinstance(form_cls, type) and issubclass(form_cls, BaseModel)):
        raise InvalidDecoderError(f"cannot decode form into {form_cls!r}")

    try:
        return form_cls.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise_bad_request(exc)
        raise  # pragma: no cover


__all__ = [
    "InvalidDecoderError",
    "decode_post_form",
    "format_pydantic_errors",
    "raise_bad_request",
]
