"""Custom exception hierarchy for the positions client."""


class ClientError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(ClientError):
    """Raised when configuration is missing or invalid."""


class AuthenticationRequired(ClientError):
    """Raised when the backend answers 401.

    Callers are expected to drop stored credentials and ask the user to log in.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)
        self.status_code = 401


class ApiError(ClientError):
    """Raised when the backend returns a non-success status other than 401.

    Attributes:
        message: Server-provided message or a synthesized "HTTP <status>: <reason>"
        status_code: HTTP status code from the backend
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedResponse(ClientError):
    """Raised when a success response body is not valid JSON."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
