"""Top-level OpenTDB client."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Awaitable, List, Optional

import httpx

from . import config
from .categories import CategoryLookup
from .parameters import EncodingType
from .questions import Question
from .request import Request
from .requester import Requester
from .tokens import SessionTokenManager
from .transport import Transport

logger = logging.getLogger(__name__)


class OpenTDB:
    """Entry point for every call to the trivia API.

    With session tokens enabled, construction starts the token fetch on a
    background worker; call ``await_token`` before relying on the token.
    Requests issued concurrently from one client share the same session
    token and may complete in any order.
    """

    def __init__(
        self,
        *,
        transport: Optional[Transport] = None,
        encoding: EncodingType = EncodingType.HTML_CODES,
        use_session_token: bool = True,
        categories: Optional[CategoryLookup] = None,
    ) -> None:
        self.transport = transport or Transport()
        self.encoding = encoding
        self.categories = categories or CategoryLookup()
        self.tokens = SessionTokenManager(self.transport, enabled=use_session_token)
        self.requester = Requester(self.transport, self.tokens, encoding, self.categories)
        self._executor: Optional[ThreadPoolExecutor] = None
        if use_session_token:
            self.start_token_fetch()

    @classmethod
    def new(cls) -> "OpenTDB":
        return cls.builder().build()

    @staticmethod
    def builder() -> "OpenTDBBuilder":
        return OpenTDBBuilder()

    @property
    def token(self) -> Optional[str]:
        """The session token, or ``None`` if disabled or not fetched yet."""
        return self.tokens.token

    # Session token

    def start_token_fetch(self) -> "Future[None]":
        """Fetch the session token on a background worker and return at once."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="opentdb-token")
        return self._executor.submit(self._fetch_token_in_background)

    def _fetch_token_in_background(self) -> None:
        try:
            self.tokens.fetch_token()
        except Exception as exc:
            self.tokens.record_failure(exc)
            raise

    def await_token(self, timeout: Optional[float] = None) -> "OpenTDB":
        """Block until the session token is ready; returns ``self`` for chaining."""
        self.tokens.await_token(timeout)
        return self

    def reset_token(self) -> None:
        self.tokens.reset_token()

    def reset_token_async(self) -> Awaitable[None]:
        return self.tokens.reset_token_async()

    # Questions

    def send(self, request: Request) -> List[Question]:
        return self.requester.send(request)

    async def send_async(self, request: Request) -> List[Question]:
        return await self.requester.send_async(request)

    def fetch_questions(self, amount: int) -> List[Question]:
        return self.send(Request.new_request(amount))

    async def fetch_questions_async(self, amount: int) -> List[Question]:
        return await self.send_async(Request.new_request(amount))

    # Categories

    def refresh_categories(self) -> None:
        self.categories.refresh(self.transport)

    async def refresh_categories_async(self) -> None:
        await self.categories.refresh_async(self.transport)

    # Lifecycle

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
        self.transport.close()

    async def aclose(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
        await self.transport.aclose()

    def __enter__(self) -> "OpenTDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "OpenTDB":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


class OpenTDBBuilder:
    def __init__(self) -> None:
        self._http_client: Optional[httpx.Client] = None
        self._async_http_client: Optional[httpx.AsyncClient] = None
        self._encoding = EncodingType.HTML_CODES
        self._use_session_token = True
        self._base_url = config.BASE_URL
        self._timeout_seconds = config.REQUEST_TIMEOUT_SECONDS
        self._categories: Optional[CategoryLookup] = None

    def set_http_client(self, http_client: Optional[httpx.Client]) -> "OpenTDBBuilder":
        self._http_client = http_client
        return self

    def set_async_http_client(self, http_client: Optional[httpx.AsyncClient]) -> "OpenTDBBuilder":
        self._async_http_client = http_client
        return self

    def set_encoding(self, encoding: EncodingType) -> "OpenTDBBuilder":
        if encoding is None:
            raise ValueError("encoding may not be None")
        self._encoding = encoding
        return self

    def use_session_token(self, use_session_token: bool) -> "OpenTDBBuilder":
        """Enable or disable the session token (enabled by default).

        With a token the service never hands out the same question twice.
        Once every question has been served, either reset the token or
        build a new client.
        """
        self._use_session_token = use_session_token
        return self

    def set_base_url(self, base_url: str) -> "OpenTDBBuilder":
        self._base_url = base_url
        return self

    def set_timeout(self, timeout_seconds: float) -> "OpenTDBBuilder":
        self._timeout_seconds = timeout_seconds
        return self

    def set_category_lookup(self, categories: Optional[CategoryLookup]) -> "OpenTDBBuilder":
        self._categories = categories
        return self

    def build(self) -> OpenTDB:
        """Build the client.

        With session tokens on, the token fetch starts in the background
        before this returns; call ``await_token`` before relying on it.
        """
        transport = Transport(
            base_url=self._base_url,
            timeout_seconds=self._timeout_seconds,
            http_client=self._http_client,
            async_http_client=self._async_http_client,
        )
        client = OpenTDB(
            transport=transport,
            encoding=self._encoding,
            use_session_token=self._use_session_token,
            categories=self._categories,
        )
        return client
