"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI

from twinship.domain.service import InvitationService
from twinship.interface.api.routes import deep_links, health, invitations
from twinship.interface.error import register_error_handlers
from twinship.util.di.container import create_container, setup_di
from twinship.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Prune stale invitations once at startup and close the container on exit."""
    container: AsyncContainer = app.state.dishka_container
    invitation_service = await container.get(InvitationService)
    await invitation_service.initialize()
    logfire.info("Invitation engine started")
    yield
    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when omitted
    """
    app_instance = FastAPI(
        title="Twinship Invitations API",
        description="Invitation lifecycle and deep-link dispatch for Twinship",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(deep_links.router)

    return app_instance
