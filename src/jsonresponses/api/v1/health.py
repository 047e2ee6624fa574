# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the health unit so this responsibility stays isolated, testable, and easy to evolve."""

from fastapi import APIRouter, Depends

from jsonresponses.api.dependencies import get_json_responses
from jsonresponses.api.http_responses import JsonResponses
from jsonresponses.models.envelope import ResponseEnvelope

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=ResponseEnvelope)
async def api_health(responses: JsonResponses = Depends(get_json_responses)):
    """Api Health."""
    return responses.respond_success("OK", {"status": "ok"})
