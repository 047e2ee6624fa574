# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Covers resolution of validation error sources and their 422 envelopes."""

import json
from unittest import TestCase

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ValidationError

from jsonresponses.api.http_responses import JsonResponses
from jsonresponses.services.exceptions import NoValidationErrorsError
from jsonresponses.services.validation import (
    AttachedResponseErrors,
    FieldErrors,
    group_field_errors,
    handle_validation_exception,
    resolve_validation_source,
    validation_messages,
)


class _FakeRequest:
    """Stands in for a Starlette request; only scope and session are read."""

    def __init__(self, session=None):
        self.scope = {} if session is None else {"session": session}
        self.session = session


class _ExceptionWithResponse(Exception):
    def __init__(self, response):
        super().__init__("invalid")
        self.response = response


class _Person(BaseModel):
    name: str
    age: int


class ResolveValidationSourceTest(TestCase):
    def test_attached_json_response_wins(self):
        attached = JSONResponse({"name": ["The name field is required."]}, status_code=422)
        source = resolve_validation_source(
            _ExceptionWithResponse(attached),
            _FakeRequest({"errors": {"ignored": ["x"]}}),
        )
        self.assertIsInstance(source, AttachedResponseErrors)
        self.assertIs(source.response, attached)

    def test_non_json_attached_response_falls_back_to_session(self):
        exc = _ExceptionWithResponse(PlainTextResponse("nope"))
        source = resolve_validation_source(
            exc, _FakeRequest({"errors": {"email": ["Invalid email."]}})
        )
        self.assertEqual(source, FieldErrors({"email": ["Invalid email."]}))

    def test_request_validation_error_is_grouped_by_field(self):
        exc = RequestValidationError(
            [
                {"loc": ("body", "name"), "msg": "Field required", "type": "missing"},
                {"loc": ("body", "name"), "msg": "Too short", "type": "value_error"},
                {"loc": ("query", "page"), "msg": "Not an int", "type": "int_parsing"},
            ]
        )
        source = resolve_validation_source(exc)
        self.assertEqual(
            source.errors,
            {
                "body.name": ["Field required", "Too short"],
                "query.page": ["Not an int"],
            },
        )

    def test_pydantic_validation_error_is_grouped_by_field(self):
        try:
            _Person.model_validate({"age": "old"})
        except ValidationError as exc:
            source = resolve_validation_source(exc)
        self.assertIsInstance(source, FieldErrors)
        self.assertEqual(sorted(source.errors), ["age", "name"])

    def test_missing_session_key_gives_empty_source(self):
        source = resolve_validation_source(ValueError("bad"), _FakeRequest({}))
        self.assertEqual(source, FieldErrors(None))

    def test_no_session_and_no_request(self):
        self.assertEqual(resolve_validation_source(ValueError("bad")), FieldErrors(None))
        self.assertEqual(
            resolve_validation_source(ValueError("bad"), _FakeRequest()),
            FieldErrors(None),
        )


class ValidationMessagesTest(TestCase):
    def test_group_field_errors_without_location(self):
        self.assertEqual(
            group_field_errors([{"loc": (), "msg": "Broken"}]),
            {"__root__": ["Broken"]},
        )

    def test_bare_string_messages_become_lists(self):
        messages = validation_messages(FieldErrors({"name": "Required"}))
        self.assertEqual(messages, {"name": ["Required"]})

    def test_attached_response_body_is_decoded(self):
        attached = JSONResponse({"errors": {"name": ["Required"]}})
        self.assertEqual(
            validation_messages(AttachedResponseErrors(attached)),
            {"errors": {"name": ["Required"]}},
        )

    def test_no_errors_available_raises(self):
        with self.assertRaises(NoValidationErrorsError) as ctx:
            validation_messages(FieldErrors(None))
        self.assertEqual(ctx.exception.detail, "No validation errors available")


class HandleValidationExceptionTest(TestCase):
    def test_session_errors_become_422_envelope(self):
        response = handle_validation_exception(
            JsonResponses(), FieldErrors({"email": ["The email must be valid."]})
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            json.loads(response.body),
            {
                "response": {
                    "success": False,
                    "message": "Validation Failure",
                    "response_code": 422,
                },
                "data": {"email": ["The email must be valid."]},
            },
        )

    def test_attached_response_becomes_422_envelope(self):
        attached = JSONResponse({"name": ["Required"]}, status_code=422)
        response = handle_validation_exception(
            JsonResponses(), AttachedResponseErrors(attached)
        )
        body = json.loads(response.body)
        self.assertEqual(response.status_code, 422)
        self.assertIs(body["response"]["success"], False)
        self.assertEqual(body["data"], {"name": ["Required"]})

    def test_empty_source_raises_instead_of_responding(self):
        responses = JsonResponses()
        with self.assertRaises(NoValidationErrorsError):
            handle_validation_exception(responses, FieldErrors(None))
        self.assertEqual(responses.get_status_code(), 200)
