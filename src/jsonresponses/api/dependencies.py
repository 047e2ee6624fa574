# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Per-request ``JsonResponses`` for route handlers.

Usage::

    @router.get("/things/{thing_id}")
    async def get_thing(
        thing_id: int, responses: JsonResponses = Depends(get_json_responses)
    ):
        ...
        return responses.respond_success("OK", thing)
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi import Request

from jsonresponses.api.http_responses import JsonResponses
from jsonresponses.core.config import normalize_response_config


def json_responses_from_config(config: Mapping[str, Any] | None) -> JsonResponses:
    """Build a fresh builder honoring the ``json`` section of the response config."""
    json_cfg = normalize_response_config(config).get("json") or {}
    return JsonResponses(
        pretty_print=json_cfg.get("pretty_print", False),
        indent=json_cfg.get("indent", 2),
    )


def get_json_responses(request: Request) -> JsonResponses:
    """FastAPI dependency: a new builder for every request."""
    config = getattr(request.app.state, "response_config", None)
    return json_responses_from_config(config)
