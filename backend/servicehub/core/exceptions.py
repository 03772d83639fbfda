"""Error taxonomy shared by the service layer.

Services raise these; ``servicehub.core.error_handlers`` turns them into the
``{"success": false, "message": ...}`` envelope with the matching status code.
"""
from typing import Any, List, Optional


class ServiceHubError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.message
        self.errors = errors
        super().__init__(self.message)


class ValidationFailure(ServiceHubError):
    status_code = 400
    message = "Validation failed"


class Conflict(ServiceHubError):
    status_code = 409
    message = "Email already in use"


class Unauthorized(ServiceHubError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    message = "Invalid credentials"


class InvalidOrExpiredToken(Unauthorized):
    # The reset endpoint reports bad tokens as a client error, not an auth challenge.
    status_code = 400
    message = "Invalid or expired token."


class NotFound(ServiceHubError):
    status_code = 404
    message = "Not found"


class Internal(ServiceHubError):
    status_code = 500
    message = "Internal server error"


class TokenConfigurationError(Internal):
    pass


class MailDeliveryError(Internal):
    message = "Email could not be sent. Try again later."
