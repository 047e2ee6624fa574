# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Uniform JSON responses for route handlers.

Composition of response code, result flag, message and data. ``JsonResponses``
defines shortcut methods for the common outcomes so handlers never assemble
envelopes by hand. Hold one instance per request (see
``jsonresponses.api.dependencies.get_json_responses``); the status code is
instance state.

Examples::

    responses.respond_success("OK", {"time": time.time()})

    responses.respond_internal_error()

    responses.respond_not_acceptable(
        "Mugwumps are not found in swamps", {"location": "desert"}
    )

    responses.set_status_code(418).respond_message(False, "I'm a teapot")
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from fastapi import status
from fastapi.responses import JSONResponse

from jsonresponses.models.envelope import ResponseEnvelope


class PrettyJSONResponse(JSONResponse):
    """JSONResponse rendered with indentation, for humans reading the API."""

    indent: int = 2

    def __init__(
        self, content: Any, *args: Any, indent: int | None = None, **kwargs: Any
    ):
        if indent is not None:
            self.indent = indent
        super().__init__(content, *args, **kwargs)

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=self.indent,
            separators=(",", ": "),
        ).encode("utf-8")


class JsonResponses:
    """Builds envelope responses and tracks the status code they carry."""

    def __init__(
        self,
        status_code: int = status.HTTP_200_OK,
        *,
        pretty_print: bool = False,
        indent: int = 2,
    ):
        self._status_code = status_code
        self.pretty_print = pretty_print
        self.indent = indent

    def get_status_code(self) -> int:
        return self._status_code

    def set_status_code(self, status_code: int = status.HTTP_200_OK) -> "JsonResponses":
        """Set the status code, e.g. 200, 404 or 500. Any integer is accepted.

        Returns self so calls can be chained.
        """
        self._status_code = status_code
        return self

    # -- success responses, 200+ --

    def respond_success(self, message: str = "OK", data: Any = None) -> JSONResponse:
        """Respond with success and the current status code (200 unless changed)."""
        return self.respond_message(True, message, data)

    def respond_created(self, message: str = "Created", data: Any = None) -> JSONResponse:
        return self.set_status_code(status.HTTP_201_CREATED).respond_message(
            True, message, data
        )

    def respond_accepted(self, message: str = "Accepted", data: Any = None) -> JSONResponse:
        return self.set_status_code(status.HTTP_202_ACCEPTED).respond_message(
            True, message, data
        )

    # -- client error responses, 400+ --

    def respond_bad_request(
        self, message: str = "Bad Request!", data: Any = None
    ) -> JSONResponse:
        return self.set_status_code(status.HTTP_400_BAD_REQUEST).respond_message(
            False, message, data
        )

    def respond_unauthorized(
        self, message: str = "Unauthorized!", data: Any = None
    ) -> JSONResponse:
        return self.set_status_code(status.HTTP_401_UNAUTHORIZED).respond_message(
            False, message, data
        )

    def respond_forbidden(self, message: str = "Forbidden!", data: Any = None) -> JSONResponse:
        return self.set_status_code(status.HTTP_403_FORBIDDEN).respond_message(
            False, message, data
        )

    def respond_not_found(self, message: str = "Not Found!", data: Any = None) -> JSONResponse:
        return self.set_status_code(status.HTTP_404_NOT_FOUND).respond_message(
            False, message, data
        )

    def respond_not_acceptable(
        self, message: str = "Not Acceptable!", data: Any = None
    ) -> JSONResponse:
        return self.set_status_code(status.HTTP_406_NOT_ACCEPTABLE).respond_message(
            False, message, data
        )

    def respond_unprocessable_entity(
        self, message: str = "Unprocessable!", data: Any = None
    ) -> JSONResponse:
        # Literal 422: the Starlette constant name differs across versions.
        return self.set_status_code(422).respond_message(False, message, data)

    # -- server error responses, 500+ --

    def respond_internal_error(
        self, message: str = "Internal Error!", data: Any = None
    ) -> JSONResponse:
        return self.set_status_code(
            status.HTTP_500_INTERNAL_SERVER_ERROR
        ).respond_message(False, message, data)

    def respond_not_implemented(
        self, message: str = "Not Implemented!", data: Any = None
    ) -> JSONResponse:
        return self.set_status_code(status.HTTP_501_NOT_IMPLEMENTED).respond_message(
            False, message, data
        )

    # -- generic responses --

    def respond_message(
        self, success: bool, message: str, data: Any = None
    ) -> JSONResponse:
        """Wrap success flag, message and data into the envelope and respond.

        ``data=None`` is sent as an empty object.
        """
        envelope = ResponseEnvelope.build(
            success, message, self.get_status_code(), data
        )
        return self.respond(envelope.model_dump(mode="json"))

    def respond(
        self, payload: Any, headers: Mapping[str, str] | None = None
    ) -> JSONResponse:
        """Build the JSON response carrying payload and the current status code."""
        if self.pretty_print:
            return PrettyJSONResponse(
                payload,
                status_code=self.get_status_code(),
                headers=dict(headers) if headers else None,
                indent=self.indent,
            )
        return JSONResponse(
            payload,
            status_code=self.get_status_code(),
            headers=dict(headers) if headers else None,
        )
