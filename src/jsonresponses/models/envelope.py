# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Pydantic models for the uniform response envelope.

Every JSON response produced by ``JsonResponses`` has this shape::

    {
        "response": {"success": true, "message": "OK", "response_code": 200},
        "data": {}
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ResponseMeta(BaseModel):
    """Outcome block of the envelope."""

    success: bool
    message: str
    response_code: int


class ResponseEnvelope(BaseModel):
    """Response body for every endpoint that answers through ``JsonResponses``."""

    response: ResponseMeta
    data: Any = Field(default_factory=dict)

    @classmethod
    def build(
        cls, success: bool, message: str, response_code: int, data: Any = None
    ) -> "ResponseEnvelope":
        return cls(
            response=ResponseMeta(
                success=success, message=message, response_code=response_code
            ),
            data={} if data is None else data,
        )
