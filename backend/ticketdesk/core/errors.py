"""Error kinds raised by the helpdesk service.

The HTTP layer maps each kind to a status code; callers of the service
object catch them directly.
"""


class TicketdeskError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TicketdeskError):
    kind = "not_found"


class InvalidCredentialsError(TicketdeskError):
    kind = "invalid_credentials"


class UnauthenticatedError(TicketdeskError):
    kind = "unauthenticated"


class ValidationError(TicketdeskError):
    kind = "validation_error"
