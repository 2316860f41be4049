"""Custom error classes for the chess.com API client."""

from typing import Optional, Dict, Any


class ChessAPIError(Exception):
    """Base exception for chess.com API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        retry_after: Optional[float] = None,
        url: Optional[str] = None,
    ) -> None:
        """
        Initialize ChessAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 404, 410, 429, 503, etc.)
            response_data: Raw response data from API
            retry_after: Seconds to wait before retry (for 429 errors)
            url: Requested URL
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.response_data: Dict[str, Any] = response_data or {}
        self.retry_after: Optional[float] = retry_after
        self.url: Optional[str] = url
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code == 429 and self.retry_after:
            return f"Rate Limit Error {self.status_code}: {self.message} (Retry after: {self.retry_after}s)"
        if self.status_code:
            return f"Chess.com API Error {self.status_code}: {self.message}"
        return f"Chess.com API Error: {self.message}"


class RateLimitError(ChessAPIError):
    """Rate limit error (429) that persisted through all retries."""

    pass


class NotFoundError(ChessAPIError):
    """Not found error (404/410) - player or archive doesn't exist."""

    pass


class ServiceUnavailableError(ChessAPIError):
    """Service unavailable (503) after all retries."""

    pass


class BadRequestError(ChessAPIError):
    """Bad request (400) - malformed username or path."""

    pass
