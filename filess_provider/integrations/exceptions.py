"""
Exception types raised by the filess.io API client.

Every failure surfaced by FilessClient derives from FilessError so callers
can catch transport problems as a group and still special-case API status
codes (404 on read/delete, for example).
"""

from typing import Optional


class FilessError(Exception):
    """
    Base exception for filess.io client errors.

    Attributes:
        message: Error message
        original_error: Original exception if wrapped
        resource_state: State of a resource created before the failure,
            attached by the resource controller
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        self.resource_state = None
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class FilessConfigurationError(FilessError):
    """Raised when the client is not usable as configured (e.g. empty API token)."""


class FilessTransportError(FilessError):
    """Raised when a request could not be sent or its response could not be read."""


class FilessSerializationError(FilessError):
    """Raised when a request body or response envelope is not valid JSON."""


class FilessAPIError(FilessError):
    """
    Raised for any non-2xx response.

    Attributes:
        status_code: HTTP status code returned by the API
        message: Error text, taken from the JSON ``error`` field when present
    """

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"API error (status {self.status_code}): {self.message}"

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401
