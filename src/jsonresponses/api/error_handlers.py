# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Global exception handlers that answer with response envelopes."""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException

from jsonresponses.api.dependencies import get_json_responses
from jsonresponses.services.exceptions import ServiceError
from jsonresponses.services.validation import (
    handle_validation_exception,
    resolve_validation_source,
)

logger = logging.getLogger(__name__)

_BODYLESS_STATUS_CODES = {204, 304}


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTP Error"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI request validation errors as a 422 envelope."""
    source = resolve_validation_source(exc, request)
    return handle_validation_exception(get_json_responses(request), source)


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Render Starlette HTTP exceptions (404 routes, 405 methods, ...) as envelopes.

    204 and 304 must not carry a body, so they are answered bare. A non-string
    ``detail`` is sent as ``data`` under the status phrase.
    """
    if logger.isEnabledFor(logging.WARNING):
        logger.warning("HTTP error %s: %s", exc.status_code, exc.detail)

    if exc.status_code in _BODYLESS_STATUS_CODES:
        return Response(status_code=exc.status_code, headers=exc.headers)

    if isinstance(exc.detail, str):
        message, data = exc.detail, None
    else:
        message, data = _status_phrase(exc.status_code), exc.detail

    responses = get_json_responses(request).set_status_code(exc.status_code)
    response = responses.respond_message(False, message, data)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render domain exceptions with their status, detail and optional data."""
    if exc.status_code >= 500:
        logger.error("Service error %s: %s", exc.status_code, exc.detail)
    else:
        logger.warning("Service error %s: %s", exc.status_code, exc.detail)

    responses = get_json_responses(request).set_status_code(exc.status_code)
    return responses.respond_message(False, exc.detail, exc.data)


def install_exception_handlers(app: FastAPI) -> None:
    """Register the envelope exception handlers on ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ServiceError, service_exception_handler)  # type: ignore[arg-type]
