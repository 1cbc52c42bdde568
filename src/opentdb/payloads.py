"""Pydantic models for the JSON bodies the service returns."""

from __future__ import annotations

from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PayloadValidationError

from .errors import OpenTDBError, TransportError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResponseHeader(BaseModel):
    response_code: int


class QuestionPayload(BaseModel):
    type: str
    category: str
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: List[str] = Field(default_factory=list)


class QuestionsEnvelope(ResponseHeader):
    results: List[QuestionPayload] = Field(default_factory=list)


class TokenEnvelope(ResponseHeader):
    token: Optional[str] = None
    response_message: Optional[str] = None


class CategoryPayload(BaseModel):
    id: int
    name: str


class CategoriesEnvelope(BaseModel):
    trivia_categories: List[CategoryPayload] = Field(default_factory=list)


def parse_payload(
    model: Type[ModelT],
    body: object,
    error: Type[OpenTDBError] = TransportError,
) -> ModelT:
    try:
        return model.model_validate(body)
    except PayloadValidationError as exc:
        raise error(f"Malformed {model.__name__}: {exc}") from exc
