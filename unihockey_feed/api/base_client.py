from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from unihockey_feed.config.settings import settings

# Status codes that count as transient upstream trouble
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ApiError(Exception):
    """Transport failure: upstream unreachable or answered non-2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(ApiError):
    """HTTP 400. Upstream also uses it to say "no more pages"."""


class NotFoundError(ApiError):
    """HTTP 404."""


class TransientApiError(ApiError):
    """Network error, timeout, rate limit or 5xx; the only retryable class."""


class ResponseFormatError(ApiError):
    """The body was not a JSON object."""


class BaseApiClient:
    """Thin async wrapper around httpx with status-code to exception mapping."""

    name: str = "upstream"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        max_attempts: Optional[int] = None,
    ):
        headers = {"User-Agent": settings.user_agent, "Accept": "application/json"}
        if settings.api_token:
            headers["Authorization"] = f"Bearer {settings.api_token}"
        self.client = client or httpx.AsyncClient(
            base_url=str(settings.api_base_url).rstrip("/"),
            timeout=httpx.Timeout(settings.request_timeout_seconds),
            follow_redirects=True,
            headers=headers,
        )
        self.max_attempts = max_attempts or settings.api_max_attempts

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Sends one request, retrying transient failures up to max_attempts."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(TransientApiError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._send_once(method, url, params)
        raise ApiError(f"No attempt made for {url}")  # pragma: no cover

    async def _send_once(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]],
    ) -> httpx.Response:
        logger.debug(f"{self.name}: {method} {url} params={params}")
        try:
            response = await self.client.request(method, url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(f"{self.name}: timeout for {url}: {e}")
            raise TransientApiError(f"Timeout requesting {url}") from e
        except httpx.RequestError as e:
            logger.warning(f"{self.name}: request error for {url}: {e}")
            raise TransientApiError(f"Request error for {url}: {e}") from e

        status = response.status_code
        if status == 400:
            raise BadRequestError(f"Bad request for {url}", status_code=status)
        if status == 404:
            raise NotFoundError(f"Not found: {url}", status_code=status)
        if status in RETRYABLE_STATUS_CODES:
            logger.warning(f"{self.name}: transient status {status} for {url}")
            raise TransientApiError(f"HTTP {status} for {url}", status_code=status)
        if status >= 400:
            logger.error(f"{self.name}: HTTP error {status} for {url}")
            raise ApiError(f"HTTP {status} for {url}", status_code=status)

        logger.debug(f"{self.name}: request successful: {status} for {url}")
        return response

    async def _get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self._make_request("GET", url, params=clean_params or None)
        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Invalid JSON from {url}") from e
        if not isinstance(payload, dict):
            raise ResponseFormatError(
                f"Expected a JSON object from {url}, got {type(payload).__name__}"
            )
        return payload

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.name}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
