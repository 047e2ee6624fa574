# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Domain exception hierarchy for route and service code.

Purpose: Provide HTTP-agnostic exceptions that carry enough context for the
global exception handlers to translate them into response envelopes. Route
code should raise these instead of building error responses by hand when the
failure is detected deep inside a helper.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base domain exception that carries an HTTP-equivalent status code.

    The handler registered by ``install_exception_handlers`` renders these as
    ``{"response": {"success": false, ...}, "data": ...}`` envelopes.
    """

    default_status_code: int = 500

    def __init__(
        self,
        detail: str,
        status_code: int | None = None,
        data: Any = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )
        self.data = data


class BadRequestError(ServiceError):
    """Raised when the caller provides invalid or missing input (HTTP 400)."""

    default_status_code = 400


class UnauthorizedError(ServiceError):
    """Raised when the caller is not authenticated (HTTP 401)."""

    default_status_code = 401


class ForbiddenError(ServiceError):
    """Raised when the caller may not access the resource (HTTP 403)."""

    default_status_code = 403


class NotFoundError(ServiceError):
    """Raised when a requested resource does not exist (HTTP 404)."""

    default_status_code = 404


class NotAcceptableError(ServiceError):
    """Raised when the request cannot be satisfied as asked (HTTP 406)."""

    default_status_code = 406


class UnprocessableEntityError(ServiceError):
    """Raised when well-formed input fails business rules (HTTP 422)."""

    default_status_code = 422


class ConfigurationError(ServiceError):
    """Raised when required configuration is missing or invalid (HTTP 500)."""

    default_status_code = 500


class NoValidationErrorsError(ServiceError):
    """Raised when a validation failure carries no error collection at all.

    Neither an attached JSON response nor stored field errors were found, so
    there is nothing to put into the 422 envelope.
    """

    default_status_code = 500

    def __init__(self, detail: str = "No validation errors available"):
        super().__init__(detail)
