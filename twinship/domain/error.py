"""Domain layer errors.

Every error carries a stable ``code`` so callers can render a precise
message without parsing exception text.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


class ValidationError(DomainError):
    """Missing or malformed contact details or token."""

    code = "validation"


class RateLimitExceededError(DomainError):
    """Too many invitations created within the rolling window."""

    code = "rate_limit_exceeded"

    def __init__(self, limit: int, window_seconds: int):
        self.limit = limit
        self.window_seconds = window_seconds
        super().__init__(
            f"Rate limit exceeded: {limit} invitations per {window_seconds}s"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AlreadyAcceptedError(DomainError):
    """Invitation was already redeemed."""

    code = "already_accepted"

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__(f"Invitation {invitation_id} has already been accepted")


class InvitationDeclinedError(DomainError):
    """Invitation was declined by the recipient."""

    code = "declined"

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__(f"Invitation {invitation_id} has been declined")


class InvitationExpiredError(DomainError):
    """Invitation is past its redemption window."""

    code = "expired"

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__(f"Invitation {invitation_id} has expired")


class MaxAttemptsExceededError(DomainError):
    """Delivery failed too many times to retry again."""

    code = "max_attempts_exceeded"

    def __init__(self, invitation_id: str, max_attempts: int):
        self.invitation_id = invitation_id
        self.max_attempts = max_attempts
        super().__init__(
            f"Invitation {invitation_id} reached {max_attempts} delivery attempts"
        )


class InvalidTransitionError(DomainError):
    """Requested status change would move the lifecycle backwards."""

    code = "invalid_transition"

    def __init__(self, invitation_id: str, current: str, target: str):
        self.invitation_id = invitation_id
        self.current = current
        self.target = target
        super().__init__(
            f"Invitation {invitation_id} cannot move from {current} to {target}"
        )


class ChannelUnavailableError(DomainError):
    """The device or service cannot send over this channel."""

    code = "channel_unavailable"

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"{channel} is not available on this device")


class TransportFailureError(DomainError):
    """The channel transport failed to hand the message off.

    Raised by ChannelTransport implementations; the dispatcher counts it as
    a failed delivery attempt.
    """

    code = "transport_failure"

    def __init__(self, channel: str, detail: str):
        self.channel = channel
        self.detail = detail
        super().__init__(f"{channel} transport failed: {detail}")


class StorageFailureError(DomainError):
    """Durable storage could not be read or written.

    Raised by repository implementations. Never retried automatically.
    """

    code = "storage_failure"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage {operation} failed: {detail}")
