"""
HTTP Application Entry Point

Builds the FastAPI app, registers routers and exception handlers. Use
``create_app()`` in tests for an isolated instance.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from .. import __version__
from ..errors import NotFoundError, ValidationError
from .errors import not_found_handler, unhandled_exception_handler, validation_error_handler
from .routes import activity_routes, health_routes, index_routes, schedule_routes, search_routes

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Application with every router and error handler registered.
    """
    app = FastAPI(title="agentdesk", version=__version__)

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_routes.router)
    app.include_router(index_routes.router)
    app.include_router(search_routes.router)
    app.include_router(activity_routes.router)
    app.include_router(schedule_routes.tasks_router)
    app.include_router(schedule_routes.events_router)

    return app
