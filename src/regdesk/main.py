#!/usr/bin/env python3
"""RegDesk - web application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from regdesk.config import config
from regdesk.context import AppContext
from regdesk.middleware import IOTimeoutMiddleware
from regdesk.routers import registration
from regdesk.static_files import ListingStaticFiles

logger = logging.getLogger(__name__)


def create_app(context: AppContext) -> FastAPI:
    """
    Build the web application around an already initialized context.

    The registration handler owns `/` for every HTTP method; every other path
    falls through to the static file mount.
    """
    app = FastAPI(
        title="RegDesk",
        description="Name and phone registration form",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.context = context

    app.add_middleware(
        IOTimeoutMiddleware,
        read_timeout=config["read_timeout"],
        write_timeout=config["write_timeout"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return PlainTextResponse("Internal Server Error", status_code=500)

    # Plain route without a method list, so any method is accepted
    app.add_route("/", registration.home, include_in_schema=False)

    # Static files must be mounted last so the routes above take precedence
    app.mount("/", ListingStaticFiles(directory=context.static_dir), name="static")

    return app
