"""Custom exceptions for spotmeta.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks like FastAPI.
"""

from typing import Any


class SpotMetaError(Exception):
    """Base exception for spotmeta.

    Attributes:
        status_code: HTTP status code for API error responses.
        partial: Best-effort object built before the failure, if any.
    """

    status_code: int = 500

    def __init__(self, message: str, partial: Any = None) -> None:
        self.message = message
        self.partial = partial
        super().__init__(message)


class ReferenceParseError(SpotMetaError):
    """Failed to parse a track, artist, album or playlist reference.

    Raised when the input matches no known URL or URI shape.
    Never carries a partial object.
    """

    status_code: int = 400  # Bad Request


class InvalidGidError(SpotMetaError):
    """A backend Gid is not valid base64."""

    status_code: int = 400  # Bad Request


class NotFoundError(SpotMetaError):
    """Entity not found.

    Raised when the backend answered but the record (or its thumbnail)
    is empty.
    """

    status_code: int = 404  # Not Found


class APIError(SpotMetaError):
    """Backend or thumbnail service request failed."""

    status_code: int = 502  # Bad Gateway (upstream failure)


class DecodeError(SpotMetaError):
    """Response body did not match the expected JSON shape."""

    status_code: int = 502  # Bad Gateway (upstream failure)
