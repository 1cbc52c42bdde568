"""Session token lifecycle.

A session token stops the service from serving the same question twice.
The service forgets a token after 6 hours without use; this module only
detects that, it never clears or renews the token on its own.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Optional

from . import config
from .errors import (
    ErrorResponse,
    OpenTDBError,
    TokenStateError,
    TokenWaitCancelled,
    UnexpectedStateError,
)
from .payloads import ResponseHeader, TokenEnvelope, parse_payload
from .response_codes import ResponseCode
from .transport import Transport

logger = logging.getLogger(__name__)

INACTIVITY_MESSAGE = "Session Token has been invalidated after 6 hours of inactivity"


class TokenState(str, Enum):
    DISABLED = "disabled"
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


@dataclass(frozen=True)
class TokenSnapshot:
    token: Optional[str]
    issued_at: Optional[datetime]


class SessionTokenManager:
    """Single owner of the session token and its issuance time.

    Writers replace the whole ``TokenSnapshot`` under a lock, so readers
    always see a token together with its own issuance time.
    """

    def __init__(self, transport: Transport, enabled: bool = True) -> None:
        self._transport = transport
        self._enabled = enabled
        self._lock = threading.Lock()
        self._ready = threading.Condition(self._lock)
        self._snapshot = TokenSnapshot(token=None, issued_at=None)
        self._fetch_error: Optional[BaseException] = None
        self._interrupts = 0

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return datetime.now(timezone.utc) if now is None else now

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def state(self) -> TokenState:
        if not self._enabled:
            return TokenState.DISABLED
        if self._snapshot.token is None:
            return TokenState.UNINITIALIZED
        return TokenState.ACTIVE

    def snapshot(self) -> TokenSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def token(self) -> Optional[str]:
        return self.snapshot().token

    @property
    def issued_at(self) -> Optional[datetime]:
        return self.snapshot().issued_at

    def activate(self, token: str, issued_at: Optional[datetime] = None) -> None:
        if not self._enabled:
            raise TokenStateError("Session tokens are disabled for this client.")
        with self._ready:
            self._snapshot = TokenSnapshot(token=token, issued_at=self._now(issued_at))
            self._fetch_error = None
            self._ready.notify_all()

    def record_failure(self, error: BaseException) -> None:
        """Remember a failed fetch so that waiters raise it instead of hanging."""
        with self._ready:
            self._fetch_error = error
            self._ready.notify_all()

    def is_token_expired(self, now: Optional[datetime] = None) -> bool:
        issued_at = self.issued_at
        if issued_at is None:
            return False
        return self._now(now) - issued_at > config.TOKEN_INACTIVITY_TTL

    def error_for(
        self,
        response_code: ResponseCode,
        raw_code: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ErrorResponse:
        """Build the error for a non-success reply, with expiry diagnostics."""
        if response_code is ResponseCode.TOKEN_NOT_FOUND and self.is_token_expired(now):
            logger.warning("Session token was not found; it expired after 6 hours of inactivity")
            return ErrorResponse(response_code, INACTIVITY_MESSAGE)
        if response_code is ResponseCode.UNKNOWN and raw_code is not None:
            return ErrorResponse(response_code, f"{raw_code}: {response_code.meaning}")
        return ErrorResponse(response_code)

    # Fetch

    def _check_enabled(self) -> None:
        if not self._enabled:
            raise TokenStateError("Session tokens are disabled for this client.")

    def fetch_token(self) -> None:
        self._check_enabled()
        body = self._transport.get_json(config.TOKEN_PATH, [("command", "request")])
        self._apply_issued(body)

    async def fetch_token_async(self) -> None:
        self._check_enabled()
        body = await self._transport.get_json_async(config.TOKEN_PATH, [("command", "request")])
        self._apply_issued(body)

    def _apply_issued(self, body: object) -> None:
        envelope = parse_payload(TokenEnvelope, body)
        response_code = ResponseCode.from_code(envelope.response_code)
        if response_code is not ResponseCode.SUCCESS or not envelope.token:
            logger.error(
                "Token endpoint refused to issue a token (response_code=%s)",
                envelope.response_code,
            )
            raise UnexpectedStateError(
                f"Token endpoint answered {envelope.response_code} instead of issuing a token."
            )
        logger.info("Session token issued")
        self.activate(envelope.token)

    # Reset

    def _require_token(self) -> str:
        token = self.token
        if token is None:
            raise TokenStateError("Can't reset a session token that does not exist.")
        return token

    def reset_token(self) -> None:
        token = self._require_token()
        body = self._transport.get_json(config.TOKEN_PATH, self._reset_params(token))
        self._apply_reset(body, token)

    def reset_token_async(self) -> Awaitable[None]:
        """Start a reset; raises ``TokenStateError`` right away if there is no token."""
        token = self._require_token()
        return self._reset_async(token)

    async def _reset_async(self, token: str) -> None:
        body = await self._transport.get_json_async(config.TOKEN_PATH, self._reset_params(token))
        self._apply_reset(body, token)

    @staticmethod
    def _reset_params(token: str):
        return [("command", "reset"), ("token", token)]

    def _apply_reset(self, body: object, token: str) -> None:
        header = parse_payload(ResponseHeader, body)
        response_code = ResponseCode.from_code(header.response_code)
        if response_code is not ResponseCode.SUCCESS:
            raise self.error_for(response_code, header.response_code)
        with self._lock:
            # The token string stays; only the server-side history is wiped.
            if self._snapshot.token == token:
                self._snapshot = TokenSnapshot(token=token, issued_at=self._now(None))
        logger.info("Session token has been reset")

    # Waiting

    def interrupt_waiters(self) -> None:
        """Wake every thread blocked in ``await_token`` with a cancellation."""
        with self._ready:
            self._interrupts += 1
            self._ready.notify_all()

    def await_token(self, timeout: Optional[float] = None) -> Optional[str]:
        """Block until the token leaves the uninitialized state.

        Returns the token, or ``None`` when tokens are disabled. Raises
        ``TokenWaitCancelled`` if ``interrupt_waiters`` is called meanwhile,
        ``TimeoutError`` once ``timeout`` seconds pass, and re-raises the
        failure of a token fetch that did not succeed.
        """
        if not self._enabled:
            return None
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._ready:
            generation = self._interrupts
            while self._snapshot.token is None:
                if self._interrupts != generation:
                    raise TokenWaitCancelled("Interrupted while waiting for the session token.")
                if self._fetch_error is not None:
                    if isinstance(self._fetch_error, OpenTDBError):
                        raise self._fetch_error
                    raise UnexpectedStateError("Session token fetch failed.") from self._fetch_error
                remaining = None
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise TimeoutError("Timed out waiting for the session token.")
                self._ready.wait(remaining)
            return self._snapshot.token
