# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the main unit so this responsibility stays isolated, testable, and easy to evolve.

Application entry point for a jsonresponses API server.
Includes configuration setup, session storage, envelope error handling, and
router registration.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Mapping, Optional

from fastapi import APIRouter, FastAPI
from starlette.middleware.sessions import SessionMiddleware

from jsonresponses.api.error_handlers import install_exception_handlers
from jsonresponses.core.config import (
    DEFAULT_CONFIG_PATH,
    load_response_config,
    normalize_response_config,
)

# Import API routers
from jsonresponses.api.v1.health import router as health_router  # noqa: E402


def create_app(config: Optional[Mapping[str, Any]] = None) -> FastAPI:
    """Create the FastAPI app.

    Uvicorn's reload mode requires an import string; using an app factory keeps
    route registration consistent across reload subprocesses.
    """
    if config is None:
        config = load_response_config(
            os.getenv("JSONRESPONSES_CONFIG", str(DEFAULT_CONFIG_PATH))
        )

    app = FastAPI(title="jsonresponses")
    config = normalize_response_config(config)
    app.state.response_config = config

    # Session-stored validation errors need a signing key
    secret_key = (config.get("session") or {}).get("secret_key")
    if secret_key:
        app.add_middleware(SessionMiddleware, secret_key=secret_key)

    api_v1_router = APIRouter(prefix="/api/v1")
    api_v1_router.include_router(health_router)
    app.include_router(api_v1_router)

    install_exception_handlers(app)

    return app


def build_arg_parser() -> argparse.ArgumentParser:
    """Build Arg Parser."""
    parser = argparse.ArgumentParser(
        prog="jsonresponses",
        description="Run the jsonresponses FastAPI server",
    )
    parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind (default: 8000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (development only)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (overrides reload)",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level for the server (default: info)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the response config JSON (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entrypoint to run the server via a normal Python invocation.

    Examples:
      python -m jsonresponses.main --help
      python -m jsonresponses.main --host 0.0.0.0 --port 8000 --reload
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.config:
        os.environ["JSONRESPONSES_CONFIG"] = args.config

    level = "DEBUG" if args.log_level == "trace" else args.log_level.upper()
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Import uvicorn lazily so that importing this module doesn't require it for tests/tools
    import uvicorn  # type: ignore

    # Reload and multi-worker modes need an import string.
    use_import_string = bool(args.reload) or (
        isinstance(args.workers, int) and args.workers > 1
    )
    if use_import_string:
        app_target: Any = "jsonresponses.main:create_app"
        factory = True
    else:
        app_target = create_app()
        factory = False

    uvicorn.run(
        app_target,
        host=args.host,
        port=args.port,
        reload=bool(args.reload) if args.workers in (None, 0) else False,
        workers=args.workers,
        log_level=args.log_level,
        factory=factory,
    )


if __name__ == "__main__":
    main()
