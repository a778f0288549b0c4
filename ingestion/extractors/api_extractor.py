"""
HTTP source extractor base with authentication, rate limiting and error mapping.

This module provides the request path every catalog source shares:
- One limiter token per request, taken from the run's token bucket
- Status code mapping onto the FetchError hierarchy
- JSON decoding with ParseError on malformed bodies

Failed requests are not retried; the caller skips the page or ID.
"""

import httpx
from typing import Any, Dict, Optional
from ingestion.base import DataSource
from core.exceptions import (
    FetchError,
    NetworkError,
    RateLimitError,
    AuthenticationError,
    ResourceNotFoundError,
    ParseError,
)
import logging

logger = logging.getLogger(__name__)


class APIExtractor(DataSource):
    """
    Base for sources reached over HTTP.

    The ``httpx.AsyncClient`` is injected and owned by the caller, so a run
    shares one connection pool across all of its fetch tasks and tests can
    pass a client backed by ``httpx.MockTransport``.

    Attributes:
        client: Shared HTTP client
        base_url: API root, without a trailing slash
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        batch_size: int,
        requests_per_second: float,
        timeout: float = 30.0
    ):
        super().__init__(batch_size=batch_size, requests_per_second=requests_per_second)
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def auth_headers(self) -> Dict[str, str]:
        return {}

    async def request_json(
        self,
        method: str,
        path: str,
        context,
        params: Optional[Dict[str, Any]] = None,
        content: Optional[str] = None
    ) -> Any:
        """
        Issue one rate-limited request and decode its JSON body.

        Args:
            method: HTTP method
            path: Path below ``base_url``
            context: RunContext supplying the limiter and cancel event
            params: Query parameters
            content: Raw request body

        Returns:
            Decoded JSON value

        Raises:
            NetworkError: Transport failure or timeout
            AuthenticationError: HTTP 401 or 403
            ResourceNotFoundError: HTTP 404
            RateLimitError: HTTP 429
            FetchError: Any other non-2xx status
            ParseError: Body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        await context.limiter.acquire(context.cancel_event)

        headers = {"Accept": "application/json", **self.auth_headers()}
        try:
            response = await self.client.request(
                method,
                url,
                headers=headers,
                params=params,
                content=content,
                timeout=self.timeout
            )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timeout for {url}",
                context={"source_name": self.source_name, "url": url, "timeout": self.timeout},
                original_exception=e
            )
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Network error for {url}",
                context={"source_name": self.source_name, "url": url},
                original_exception=e
            )

        self._raise_for_status(response, url)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(
                "Failed to parse JSON response",
                context={
                    "source_name": self.source_name,
                    "url": url,
                    "response_body": response.text[:500]
                },
                original_exception=e
            )

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return

        error_context = {
            "source_name": self.source_name,
            "url": url,
            "status_code": status,
            "response_body": response.text[:500]  # Truncate
        }

        if status in (401, 403):
            raise AuthenticationError(f"Authentication failed for {url}", context=error_context)

        if status == 404:
            raise ResourceNotFoundError(f"Resource not found: {url}", context=error_context)

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"Rate limit exceeded for {url}",
                context=error_context,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )

        raise FetchError(f"Unexpected status {status} from {url}", context=error_context)
