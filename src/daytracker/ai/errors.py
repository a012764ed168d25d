"""Error types for the AI coach.

Custom exceptions for generative-language API interactions.
"""


class CoachError(Exception):
    """Base exception for AI coach errors."""

    pass


class CoachTimeoutError(CoachError):
    """Raised when the API request times out."""

    pass


class CoachAPIError(CoachError):
    """Raised when the API returns an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Error message.
            status_code: HTTP status code if available.
        """
        super().__init__(message)
        self.status_code = status_code


class CoachAuthError(CoachError):
    """Raised when authentication fails."""

    pass


class CoachConnectivityError(CoachError):
    """Raised when the API cannot be reached."""

    pass


class CoachResponseError(CoachError):
    """Raised when the API response cannot be used."""

    pass


class InsufficientDataError(CoachError):
    """Raised when there is not enough logged data for a feature."""

    pass


__all__ = [
    "CoachAPIError",
    "CoachAuthError",
    "CoachConnectivityError",
    "CoachError",
    "CoachResponseError",
    "CoachTimeoutError",
    "InsufficientDataError",
]
