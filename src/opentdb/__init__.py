"""Client library for the Open Trivia Database API."""

from .categories import Category, CategoryLookup
from .client import OpenTDB, OpenTDBBuilder
from .errors import (
    ErrorResponse,
    InvalidNarrowingError,
    OpenTDBError,
    QuestionDecodeError,
    TokenStateError,
    TokenWaitCancelled,
    TransportError,
    UnexpectedStateError,
    ValidationError,
)
from .parameters import Difficulty, EncodingType, QuestionType, RequestParameter
from .questions import BooleanQuestion, MultipleChoiceQuestion, Question
from .request import Request, RequestBuilder
from .response_codes import ResponseCode
from .tokens import SessionTokenManager, TokenSnapshot, TokenState

__all__ = [
    "BooleanQuestion",
    "Category",
    "CategoryLookup",
    "Difficulty",
    "EncodingType",
    "ErrorResponse",
    "InvalidNarrowingError",
    "MultipleChoiceQuestion",
    "OpenTDB",
    "OpenTDBBuilder",
    "OpenTDBError",
    "Question",
    "QuestionDecodeError",
    "QuestionType",
    "Request",
    "RequestBuilder",
    "RequestParameter",
    "ResponseCode",
    "SessionTokenManager",
    "TokenSnapshot",
    "TokenState",
    "TokenStateError",
    "TokenWaitCancelled",
    "TransportError",
    "UnexpectedStateError",
    "ValidationError",
]
