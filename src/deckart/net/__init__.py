"""Network utilities for HTTP requests with retry logic."""

from .network import (
    HttpClient,
    RateLimiter,
    RetryConfig,
)

__all__ = [
    "HttpClient",
    "RateLimiter",
    "RetryConfig",
]
