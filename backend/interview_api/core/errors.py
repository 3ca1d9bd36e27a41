"""
Interview service exceptions
Each exception carries the HTTP status and error type used in the JSON error envelope.
"""


class InterviewError(Exception):
    """Base class for errors raised by the interview service."""

    status_code: int = 500
    error_type: str = "InternalServerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(InterviewError):
    """Missing or malformed input."""

    status_code = 400
    error_type = "ValidationError"


class SessionNotFoundError(InterviewError):
    """Unknown session identifier."""

    status_code = 404
    error_type = "NotFound"

    def __init__(self, session_id: str):
        super().__init__("Session not found")
        self.session_id = session_id


class SessionStateConflictError(InterviewError):
    """Operation not allowed in the session's current state."""

    status_code = 400
    error_type = "Conflict"


class ConfigurationError(InterviewError):
    """Required configuration (e.g. the model credential) is missing."""

    status_code = 500
    error_type = "ConfigurationError"


class ServiceUnavailableError(InterviewError):
    """The chat model could not be reached or returned no text."""

    status_code = 500
    error_type = "ServiceUnavailable"
