"""JSON-over-HTTP GET for the blocking and async paths."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

import httpx

from . import config
from .errors import TransportError

logger = logging.getLogger(__name__)

QueryParams = Sequence[Tuple[str, str]]


class Transport:
    """Thin wrapper over an ``httpx.Client`` / ``httpx.AsyncClient`` pair.

    Clients passed in are borrowed and left open by ``close``/``aclose``;
    clients created here are owned and closed. A closed transport, or a
    borrowed client that was closed, raises ``TransportError``.
    """

    def __init__(
        self,
        base_url: str = config.BASE_URL,
        timeout_seconds: float = config.REQUEST_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
        async_http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = http_client
        self._async_client = async_http_client
        self._owns_client = http_client is None
        self._owns_async_client = async_http_client is None
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _get_client(self) -> httpx.Client:
        if self._closed:
            raise TransportError("Transport is closed.")
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout_seconds)
        elif self._client.is_closed:
            raise TransportError("HTTP client is closed.")
        return self._client

    def _get_async_client(self) -> httpx.AsyncClient:
        if self._closed:
            raise TransportError("Transport is closed.")
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(timeout=self.timeout_seconds)
        elif self._async_client.is_closed:
            raise TransportError("Async HTTP client is closed.")
        return self._async_client

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def get_json(self, path: str, params: Optional[QueryParams] = None) -> Any:
        url = self.url_for(path)
        try:
            response = self._get_client().get(url, params=list(params or ()))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(f"GET {path} failed ({exc.response.status_code})") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {path} failed: {exc}") from exc
        return self._decode(path, response)

    async def get_json_async(self, path: str, params: Optional[QueryParams] = None) -> Any:
        url = self.url_for(path)
        try:
            response = await self._get_async_client().get(url, params=list(params or ()))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(f"GET {path} failed ({exc.response.status_code})") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {path} failed: {exc}") from exc
        return self._decode(path, response)

    @staticmethod
    def _decode(path: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"GET {path} returned a non-JSON body") from exc

    def close(self) -> None:
        self._closed = True
        if self._owns_client and self._client is not None:
            self._client.close()

    async def aclose(self) -> None:
        self._closed = True
        if self._owns_async_client and self._async_client is not None:
            await self._async_client.aclose()
        self.close()
