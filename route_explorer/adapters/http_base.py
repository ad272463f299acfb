"""
Shared async JSON-over-HTTP plumbing for the remote collaborators.

Lazily creates an httpx.AsyncClient, retries timeouts, rate limits and
5xx responses with exponential backoff, and converts every failure into
the collaborator-specific exception type.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Type

import httpx

from route_explorer.config import ApiConfig
from route_explorer.exceptions import RouteExplorerError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Drop empty parameters and encode booleans the way the API expects.

    Examples:
        >>> clean_params({"a": "", "b": None, "c": True, "d": 5})
        {'c': 'true', 'd': 5}
    """
    cleaned: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


class JsonHttpClient:
    """
    Base class for httpx-backed collaborator clients.

    Attributes:
        _base_url: Collaborator base URL.
        _config: Timeouts and retry settings.
        _client: Lazily created async HTTP client.
        _error_cls: Exception raised for any failure.
    """

    _error_cls: Type[RouteExplorerError] = RouteExplorerError
    _service_name: str = "remote service"

    def __init__(self, base_url: str, config: Optional[ApiConfig] = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._config = config or ApiConfig()
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(
                    self._config.timeout_seconds,
                    connect=self._config.connect_timeout_seconds,
                ),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _raise(self, status_code: int, message: str, payload: Any = None):
        raise self._error_cls(status_code, message, payload)

    async def _request_json(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Perform a request and decode its JSON body.

        Retries timeouts and retryable statuses up to ``max_retries`` times.

        Raises:
            The client's ``_error_cls`` on any failure.
        """
        client = await self._get_client()
        query = clean_params(params)

        retries = 0
        backoff = self._config.backoff_seconds

        while True:
            logger.debug("%s %s%s params=%s", method, self._base_url, path, query)
            try:
                response = await client.request(method, path, params=query, json=json)
            except httpx.TimeoutException as e:
                if retries < self._config.max_retries:
                    retries += 1
                    logger.warning(
                        "Timeout from %s, retry %d/%d in %.1fs",
                        self._service_name,
                        retries,
                        self._config.max_retries,
                        backoff,
                    )
                    await asyncio.sleep(backoff)
                    backoff *= self._config.backoff_multiplier
                    continue
                logger.error("%s timeout after %d retries", self._service_name, retries)
                self._raise(-1, f"Timeout: {e}")
            except httpx.HTTPError as e:
                logger.error("Network error talking to %s: %s", self._service_name, e)
                self._raise(-1, f"Network error: {e}")

            if response.status_code in RETRYABLE_STATUS and retries < self._config.max_retries:
                retries += 1
                logger.warning(
                    "%s returned %d, retry %d/%d in %.1fs",
                    self._service_name,
                    response.status_code,
                    retries,
                    self._config.max_retries,
                    backoff,
                )
                await asyncio.sleep(backoff)
                backoff *= self._config.backoff_multiplier
                continue

            if not response.is_success:
                payload = None
                try:
                    payload = response.json()
                except ValueError:
                    pass
                logger.error(
                    "%s error: %d %s",
                    self._service_name,
                    response.status_code,
                    response.text[:200],
                )
                self._raise(
                    response.status_code,
                    f"{self._service_name} returned status code {response.status_code}",
                    payload,
                )

            try:
                return response.json()
            except ValueError as e:
                logger.error("Invalid JSON from %s: %s", self._service_name, e)
                self._raise(response.status_code, f"Invalid JSON response: {e}")
