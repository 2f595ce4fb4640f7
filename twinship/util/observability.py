"""Logfire setup and instrumentation hooks.

Engine code emits spans and events directly::

    with logfire.span("invitation_service.accept", token=token.redacted):
        ...
    logfire.info("Invitation accepted", invitation_id=str(invitation.id))

Invitation tokens grant access, so only ``InvitationToken.redacted`` is
ever attached to spans or events.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from twinship.config import ObservabilitySettings, Settings


def _should_send(observability: ObservabilitySettings) -> bool:
    """Explicit opt-in/out wins; otherwise export only when a token is set."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire for the current process.

    Without a token or an explicit opt-in, spans are printed to the console
    and nothing leaves the process.
    """
    observability = settings.observability
    send_to_logfire = _should_send(observability)

    logfire.configure(
        service_name="twinship-invitations",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token or None,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    # Paths and headers may carry tokens
    logfire.instrument_fastapi(app, capture_headers=False)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace SMS gateway and webhook calls."""
    logfire.instrument_httpx()
