"""Custom error classes for the Deadlock API client."""

from typing import Optional


class DeadlockAPIError(Exception):
    """Base exception for Deadlock API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        body: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        """
        Initialize DeadlockAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 404, 429, 503, etc.)
            url: Requested URL
            body: Truncated response body
            retry_after: Seconds to wait before retry (for 429 errors)
        """
        super().__init__(message)
        self.message: str = message
        self.status_code: Optional[int] = status_code
        self.url: Optional[str] = url
        self.body: Optional[str] = body
        self.retry_after: Optional[float] = retry_after

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"Deadlock API Error {self.status_code}: {self.message}"
        return f"Deadlock API Error: {self.message}"


class RateLimitError(DeadlockAPIError):
    """Rate limit error (429)."""

    pass


class ForbiddenError(DeadlockAPIError):
    """Authentication or permission error (401/403) - check the API key."""

    pass


class NotFoundError(DeadlockAPIError):
    """Not found error (404) - resource doesn't exist."""

    pass


class BadRequestError(DeadlockAPIError):
    """Bad request (400) - invalid parameters."""

    pass


class ServiceUnavailableError(DeadlockAPIError):
    """Server-side error (5xx) - upstream degraded."""

    pass


class RequestTimeoutError(DeadlockAPIError):
    """Request exceeded the configured timeout and was aborted."""

    pass


class MalformedResponseError(DeadlockAPIError):
    """Response body was not valid JSON."""

    pass
