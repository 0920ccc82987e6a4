"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input rejected before any network call (bad email, missing inviter)."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when no valid user session is present."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on an invitation or notification they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to act on {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateInvitationError(DomainError):
    """Recipient already has a pending invitation from this inviter."""

    def __init__(self, recipient_email: str):
        self.recipient_email = recipient_email
        super().__init__(f"An invitation to {recipient_email} is already pending")


class InvalidTransitionError(DomainError):
    """Raised when an invitation status change violates the state machine."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move invitation from {current} to {target}")


class PersistenceError(DomainError):
    """Record store failure."""

    pass


class StoreUnavailableError(PersistenceError):
    """Record store could not be reached."""

    pass


class FieldRejectedError(PersistenceError):
    """Record store schema rejected an optional field."""

    def __init__(self, field: str, detail: str = ""):
        self.field = field
        super().__init__(f"Field {field!r} rejected by record store {detail}".strip())


class CacheError(DomainError):
    """Local ephemeral cache could not be read or written."""

    pass


class DeliveryError(DomainError):
    """Transactional email delivery failed."""

    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(message)


class SenderNotVerifiedError(DeliveryError):
    """The fixed sender identity is not verified with the provider."""

    pass


class RecipientNotVerifiedError(DeliveryError):
    """Provider sandbox mode refuses unverified recipients."""

    pass


class ConfigurationSetRejectedError(DeliveryError):
    """Provider refused the configuration set attached to the message."""

    pass


class MailProviderError(DeliveryError):
    """Any other provider-side failure."""

    pass
