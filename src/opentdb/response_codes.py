"""Response codes returned in every API reply."""

from __future__ import annotations

from enum import Enum


class ResponseCode(Enum):
    UNKNOWN = (-1, "Unknown Response Code", False)
    SUCCESS = (0, "Success", False)
    # Not enough questions for the query, e.g. 50 asked in a category holding 20.
    NO_RESULTS = (1, "No Results", True)
    INVALID_PARAMETER = (2, "Invalid Parameter", True)
    # Most commonly the token was dropped after 6 hours of inactivity.
    TOKEN_NOT_FOUND = (3, "Token Not Found", True)
    # Every question for the query was already served; the token needs a reset.
    TOKEN_EMPTY = (4, "Token Empty", True)

    def __init__(self, code: int, meaning: str, is_error: bool) -> None:
        self.code = code
        self.meaning = meaning
        self.is_error = is_error

    @classmethod
    def from_code(cls, code: int) -> "ResponseCode":
        """Look a code up, falling back to ``UNKNOWN`` when nothing matches."""
        for member in cls:
            if member.code == code:
                return member
        return cls.UNKNOWN
