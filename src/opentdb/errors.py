"""Exceptions raised by the OpenTDB client."""

from __future__ import annotations

from typing import Optional

from .response_codes import ResponseCode


class OpenTDBError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(OpenTDBError, ValueError):
    """Raised when a request is constructed with invalid input."""


class ErrorResponse(OpenTDBError):
    """An API reply whose response code signals a failure.

    Carries the ``ResponseCode`` the service answered with. ``UNKNOWN`` is
    allowed so that unrecognised codes and transport failures share this
    type; constructing one with ``SUCCESS`` is a programming error.
    """

    def __init__(self, response_code: ResponseCode, message: Optional[str] = None) -> None:
        if not response_code.is_error and response_code is not ResponseCode.UNKNOWN:
            raise ValueError(
                f"Cannot build an ErrorResponse from non-error code {response_code.name}."
            )
        self.response_code = response_code
        super().__init__(message or f"{response_code.code}: {response_code.meaning}")

    @property
    def code(self) -> int:
        return self.response_code.code

    @property
    def meaning(self) -> str:
        return self.response_code.meaning


class TransportError(ErrorResponse):
    """Network, HTTP status or body decoding failure, reported as UNKNOWN."""

    def __init__(self, message: str) -> None:
        super().__init__(ResponseCode.UNKNOWN, message)


class UnexpectedStateError(OpenTDBError):
    """The token endpoint refused to issue a token."""


class InvalidNarrowingError(OpenTDBError, TypeError):
    """A question was narrowed to a variant it is not."""


class QuestionDecodeError(OpenTDBError, ValueError):
    """A result element could not be turned into a question."""


class TokenStateError(OpenTDBError, RuntimeError):
    """A token operation was attempted in a state that does not allow it."""


class TokenWaitCancelled(OpenTDBError):
    """A blocking wait for the session token was interrupted."""
