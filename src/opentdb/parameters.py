"""Typed options that map onto query-string parameters."""

from __future__ import annotations

import base64
import html
from enum import Enum
from typing import Protocol
from urllib.parse import unquote, unquote_plus


class RequestParameter(Protocol):
    """Anything that can be written to the wire as ``name=value``."""

    @property
    def parameter_name(self) -> str: ...

    @property
    def parameter_value(self) -> str: ...


class EncodingType(Enum):
    """Text escaping the service applies to question and answer strings."""

    HTML_CODES = ("", "Default Encoding (HTML Codes)")
    LEGACY_URL = ("urlLegacy", "Legacy URL Encoding")
    RFC_3986 = ("url3986", "URL Encoding (RFC 3986)")
    BASE_64 = ("base64", "Base64 Encoding")

    def __init__(self, code: str, readable_name: str) -> None:
        self.code = code
        self.readable_name = readable_name

    @property
    def parameter_name(self) -> str:
        return "encode"

    @property
    def parameter_value(self) -> str:
        return self.code

    def decode(self, text: str) -> str:
        """Undo this encoding on a string received from the service."""
        if self is EncodingType.HTML_CODES:
            return html.unescape(text)
        if self is EncodingType.LEGACY_URL:
            return unquote_plus(text)
        if self is EncodingType.RFC_3986:
            return unquote(text)
        return base64.b64decode(text).decode("utf-8")


class QuestionType(str, Enum):
    MULTIPLE = "multiple"
    BOOLEAN = "boolean"

    @property
    def parameter_name(self) -> str:
        return "type"

    @property
    def parameter_value(self) -> str:
        return self.value


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def parameter_name(self) -> str:
        return "difficulty"

    @property
    def parameter_value(self) -> str:
        return self.value
