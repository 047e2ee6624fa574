# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the conftest unit so this responsibility stays isolated, testable, and easy to evolve."""

import os
import tempfile
import pytest
from pathlib import Path

_ENV_KEYS = (
    "JSONRESPONSES_CONFIG",
    "JSONRESPONSES_PRETTY_PRINT",
    "JSONRESPONSES_INDENT",
    "JSONRESPONSES_SESSION_SECRET",
)


@pytest.fixture(scope="session", autouse=True)
def session_temp_env():
    # Point the default config at an empty temp dir so a developer's local
    # config/responses.json never leaks into the tests.
    td = tempfile.TemporaryDirectory(prefix="jsonresponses_test_session_")
    originals = {key: os.environ.pop(key, None) for key in _ENV_KEYS}
    os.environ["JSONRESPONSES_CONFIG"] = str(Path(td.name) / "responses.json")

    yield

    td.cleanup()
    for key, value in originals.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)
