# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Translate validation failures into 422 response envelopes.

The error collection comes from one of two places, modelled explicitly:

- ``AttachedResponseErrors``: the exception already carries a built JSON
  response; its decoded body is reported as-is.
- ``FieldErrors``: a mapping of field name to error strings, read from the
  session under ``"errors"`` or grouped from a pydantic / FastAPI validation
  error.

Callers resolve the source (``resolve_validation_source``) and pass it to
``handle_validation_exception``; nothing here reaches into ambient state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.responses import Response

from jsonresponses.api.http_responses import JsonResponses
from jsonresponses.services.exceptions import NoValidationErrorsError

logger = logging.getLogger(__name__)

SESSION_ERRORS_KEY = "errors"
VALIDATION_FAILURE_MESSAGE = "Validation Failure"
ROOT_FIELD = "__root__"


@dataclass(frozen=True)
class AttachedResponseErrors:
    """Errors carried by a response object attached to the exception."""

    response: Response


@dataclass(frozen=True)
class FieldErrors:
    """Field name to error strings; ``None`` when no collection was found."""

    errors: Mapping[str, Any] | None


ValidationErrorSource = Union[AttachedResponseErrors, FieldErrors]


def group_field_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic-style error dicts by dotted field location.

    ``[{"loc": ("body", "name"), "msg": "Field required"}]`` becomes
    ``{"body.name": ["Field required"]}``.
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = error.get("loc") or ()
        field = ".".join(str(part) for part in loc) or ROOT_FIELD
        grouped.setdefault(field, []).append(str(error.get("msg", "")))
    return grouped


def resolve_validation_source(
    exc: BaseException, request: Request | None = None
) -> ValidationErrorSource:
    """Pick the error collection for a validation failure.

    Order: JSON response attached to the exception, then the exception's own
    field errors (pydantic / FastAPI), then session-stored errors.
    """
    attached = getattr(exc, "response", None)
    if isinstance(attached, JSONResponse):
        logger.debug("Validation errors taken from attached response")
        return AttachedResponseErrors(attached)

    if isinstance(exc, (RequestValidationError, ValidationError)):
        logger.debug("Validation errors taken from %s", type(exc).__name__)
        return FieldErrors(group_field_errors(exc.errors()))

    if request is not None and "session" in request.scope:
        logger.debug("Validation errors taken from session")
        return FieldErrors(request.session.get(SESSION_ERRORS_KEY))

    return FieldErrors(None)


def _normalize_field_errors(errors: Mapping[str, Any]) -> dict[str, list[str]]:
    normalized: dict[str, list[str]] = {}
    for field, messages in errors.items():
        if isinstance(messages, str):
            normalized[str(field)] = [messages]
        else:
            normalized[str(field)] = [str(m) for m in messages]
    return normalized


def validation_messages(source: ValidationErrorSource) -> Any:
    """Return the messages to report for ``source``.

    Raises:
        NoValidationErrorsError: the source holds no error collection.
    """
    if isinstance(source, AttachedResponseErrors):
        try:
            return json.loads(bytes(source.response.body))
        except json.JSONDecodeError as e:
            raise NoValidationErrorsError(
                f"Attached response body is not JSON: {e}"
            ) from e

    if source.errors is None:
        raise NoValidationErrorsError()
    return _normalize_field_errors(source.errors)


def handle_validation_exception(
    responses: JsonResponses, source: ValidationErrorSource
) -> JSONResponse:
    """Respond 422 "Validation Failure" with the messages from ``source``."""
    messages = validation_messages(source)
    logger.warning("Validation failure: %s", messages)
    return responses.respond_unprocessable_entity(VALIDATION_FAILURE_MESSAGE, messages)
