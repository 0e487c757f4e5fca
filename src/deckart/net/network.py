"""Centralized HTTP access with retry logic and fixed request pacing.

This module provides:
- A ``requests.Session`` wrapper shared by every API client
- Automatic retries with exponential backoff for 429 and 5xx responses
- Jitter to prevent thundering herd
- A per-collaborator rate limiter that pauses before every call
- Translation of failures into the Deck Art error hierarchy
"""

import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import requests

from deckart.core.logging import get_logger
from deckart.errors import AssetError, NetworkError, RemoteServiceError

logger = get_logger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 3
    base_delay: float = 0.5  # seconds
    max_delay: float = 30.0  # seconds
    exponential_base: float = 2.0
    jitter: bool = True
    retry_on_429: bool = True  # Rate limit errors
    retry_on_5xx: bool = True  # Server errors
    timeout: int = 30  # seconds

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt with exponential backoff and jitter."""
        delay = min(self.base_delay * (self.exponential_base**attempt), self.max_delay)

        if self.jitter:
            # Add random jitter (0-50% of delay)
            delay += random.uniform(0, delay * 0.5)

        return delay

    def should_retry(self, status: int) -> bool:
        if status == 429:
            return self.retry_on_429
        if 500 <= status < 600:
            return self.retry_on_5xx
        return False


@dataclass
class RateLimiter:
    """Pause for a fixed interval before each request to one service.

    Unlike a minimum-spacing limiter this always sleeps, matching the
    "wait, then call" contract of the deck and card APIs. Tests pass a
    zero interval or a recording ``sleep``.
    """

    interval: float
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def wait(self) -> None:
        if self.interval > 0:
            self.sleep(self.interval)


class HttpClient:
    """Thin, retrying wrapper around a ``requests.Session``."""

    def __init__(
        self,
        *,
        user_agent: str,
        config: Optional[RetryConfig] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or RetryConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept": "*/*"})
        self._sleep = sleep

    def get(
        self,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> requests.Response:
        """Issue a GET request, retrying rate-limit and server errors.

        Args:
            url: URL to fetch
            params: Optional query parameters
            rate_limiter: Pacing applied before the first attempt

        Returns:
            The successful (2xx) response

        Raises:
            RemoteServiceError: If the final response is not 2xx
            NetworkError: If the service could not be reached
        """
        if rate_limiter is not None:
            rate_limiter.wait()

        config = self.config
        last_error: Optional[Exception] = None

        for attempt in range(config.max_retries):
            try:
                response = self.session.get(url, params=params, timeout=config.timeout)
            except requests.RequestException as error:
                last_error = error
                if attempt < config.max_retries - 1:
                    delay = config.get_delay(attempt)
                    logger.debug("Request to {} failed ({}), retrying in {:.2f}s", url, error, delay)
                    self._sleep(delay)
                    continue
                break

            if response.ok:
                return response

            if config.should_retry(response.status_code) and attempt < config.max_retries - 1:
                delay = config.get_delay(attempt)
                logger.debug(
                    "HTTP {} from {}, retrying in {:.2f}s (attempt {}/{})",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    config.max_retries,
                )
                self._sleep(delay)
                continue

            raise RemoteServiceError(response.status_code, response.url or url)

        raise NetworkError(
            f"Unable to reach {url} after {config.max_retries} attempts ({last_error})"
        )

    def get_json(
        self,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> dict[str, Any]:
        """Fetch URL content as a JSON object.

        Raises:
            RemoteServiceError: On a non-2xx response or a non-object body
        """
        response = self.get(url, params=params, rate_limiter=rate_limiter)
        try:
            data = response.json()
        except ValueError as error:
            raise RemoteServiceError(
                response.status_code, url, f"Invalid JSON from {url}: {error}"
            ) from error
        if not isinstance(data, dict):
            raise RemoteServiceError(
                response.status_code, url, f"Unexpected response shape from {url}"
            )
        return data

    def download(
        self,
        url: str,
        destination: Path,
        *,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> Path:
        """Download URL to destination, writing atomically.

        Content goes to ``<destination>.part`` first and is renamed into
        place, so a failed download never leaves a partial file behind.
        """
        content = self.get(url, rate_limiter=rate_limiter).content

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise AssetError(f"Could not write {destination}: {error}") from error

        tmp_path = destination.with_suffix(destination.suffix + ".part")
        try:
            tmp_path.write_bytes(content)
            tmp_path.replace(destination)
        except OSError as error:
            raise AssetError(f"Could not write {destination}: {error}") from error
        finally:
            tmp_path.unlink(missing_ok=True)

        return destination
