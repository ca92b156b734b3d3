"""
================================================================================
ERRORS.PY - ERROR TAXONOMY
================================================================================
PURPOSE: Exceptions raised by the search engine, the sheet row source and the
         identity helpers. Each carries the HTTP status the handlers answer
         with and a short human-readable message.
================================================================================
"""


class AppError(Exception):
    """Base class for errors surfaced to the caller as a JSON error payload."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message}


class InvalidQuery(AppError):
    """Missing or malformed request parameter (user-correctable)."""

    status_code = 400
    default_message = "Invalid request"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Authentication required"


class MethodNotAllowed(AppError):
    status_code = 405
    default_message = "Method not allowed"


class UserExists(AppError):
    status_code = 400
    default_message = "Username already taken"


class DataUnavailable(AppError):
    """Backend unreachable, credentials rejected or range malformed."""

    status_code = 500
    default_message = "Failed to fetch data"


class ConfigurationError(AppError):
    status_code = 500
    default_message = "Server is not configured"
