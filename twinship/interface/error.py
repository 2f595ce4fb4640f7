"""Interface layer error mapping.

Every domain error kind maps to a distinct, non-technical message and an
HTTP status. Already accepted, declined and expired invitations are
informational outcomes rather than failures.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from twinship.domain.error import (
    AlreadyAcceptedError,
    ChannelUnavailableError,
    DomainError,
    InvalidTransitionError,
    InvitationDeclinedError,
    InvitationExpiredError,
    MaxAttemptsExceededError,
    NotFoundError,
    RateLimitExceededError,
    StorageFailureError,
    TransportFailureError,
    ValidationError,
)


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    error: str
    message: str
    informational: bool = False


class ErrorDescription(BaseModel):
    """How an error kind is presented to the user."""

    status_code: int
    message: str
    informational: bool = False


ERROR_DESCRIPTIONS: dict[type[DomainError], ErrorDescription] = {
    RateLimitExceededError: ErrorDescription(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        message="You've sent a lot of invitations recently. Please wait a while before sending another.",
    ),
    NotFoundError: ErrorDescription(
        status_code=status.HTTP_404_NOT_FOUND,
        message="We couldn't find that invitation. Check the code and try again.",
    ),
    AlreadyAcceptedError: ErrorDescription(
        status_code=status.HTTP_409_CONFLICT,
        message="This invitation has already been accepted.",
        informational=True,
    ),
    InvitationDeclinedError: ErrorDescription(
        status_code=status.HTTP_409_CONFLICT,
        message="This invitation was declined.",
        informational=True,
    ),
    InvitationExpiredError: ErrorDescription(
        status_code=status.HTTP_410_GONE,
        message="This invitation has expired. Ask your twin to send a new one.",
        informational=True,
    ),
    MaxAttemptsExceededError: ErrorDescription(
        status_code=status.HTTP_409_CONFLICT,
        message="This invitation couldn't be delivered after several tries. Please create a new one.",
    ),
    InvalidTransitionError: ErrorDescription(
        status_code=status.HTTP_409_CONFLICT,
        message="This invitation can no longer be changed.",
    ),
    ChannelUnavailableError: ErrorDescription(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        message="That way of sending isn't available right now. Try another one.",
    ),
    TransportFailureError: ErrorDescription(
        status_code=status.HTTP_502_BAD_GATEWAY,
        message="We couldn't send your invitation. Please try again.",
    ),
    StorageFailureError: ErrorDescription(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        message="Something went wrong saving your invitation. Please try again.",
    ),
}

FALLBACK_DESCRIPTION = ErrorDescription(
    status_code=status.HTTP_400_BAD_REQUEST,
    message="Something went wrong with your invitation.",
)


def describe_error(error: DomainError) -> ErrorDescription:
    """Look up the user-facing description for a domain error.

    Validation errors already carry a user-facing message, so it is shown
    as-is.
    """
    if isinstance(error, ValidationError):
        return ErrorDescription(status_code=status.HTTP_400_BAD_REQUEST, message=str(error))
    for error_type in type(error).__mro__:
        description = ERROR_DESCRIPTIONS.get(error_type)
        if description is not None:
            return description
    return FALLBACK_DESCRIPTION


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as an ErrorResponse."""
    description = describe_error(exc)
    if description.informational:
        logfire.info("Informational outcome", code=exc.code, path=request.url.path)
    else:
        logfire.warn(
            "Request failed", code=exc.code, error=str(exc), path=request.url.path
        )
    return JSONResponse(
        status_code=description.status_code,
        content=ErrorResponse(
            error=exc.code,
            message=description.message,
            informational=description.informational,
        ).model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
