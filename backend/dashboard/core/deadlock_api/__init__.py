"""
Deadlock API client package.

This package provides an async HTTP client for the public Deadlock stats API
and its asset catalog, including timeout handling and error mapping.
"""

from .client import DeadlockAPIClient, encode_query
from .endpoints import DeadlockAPIEndpoints
from .errors import (
    DeadlockAPIError,
    RateLimitError,
    ForbiddenError,
    NotFoundError,
    BadRequestError,
    ServiceUnavailableError,
    RequestTimeoutError,
    MalformedResponseError,
)

__all__ = [
    "DeadlockAPIClient",
    "DeadlockAPIEndpoints",
    "encode_query",
    "DeadlockAPIError",
    "RateLimitError",
    "ForbiddenError",
    "NotFoundError",
    "BadRequestError",
    "ServiceUnavailableError",
    "RequestTimeoutError",
    "MalformedResponseError",
]
