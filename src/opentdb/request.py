"""Immutable question requests and their builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, List, Optional

from .categories import Category
from .errors import ValidationError
from .parameters import Difficulty, QuestionType

if TYPE_CHECKING:
    from .client import OpenTDB
    from .questions import Question


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"Request amount must be an integer, got {amount!r}.")
    if amount <= 0:
        raise ValidationError("Can't create a request with an amount of 0 or less.")


@dataclass(frozen=True)
class Request:
    """Fetch ``amount`` questions matching the optional filters.

    No upper bound is enforced on ``amount``. The service will not return
    more than 50 questions at a time, so larger requests come back capped.
    """

    amount: int
    category: Optional[Category] = None
    type: Optional[QuestionType] = None
    difficulty: Optional[Difficulty] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)
        if self.category is not None and self.category.id is None:
            raise ValidationError(
                f"Category {self.category.name!r} has no id and cannot be used as a filter."
            )

    @classmethod
    def new_request(cls, amount: int) -> "Request":
        return cls.new_builder(amount).build()

    @classmethod
    def new_builder(cls, amount: int) -> "RequestBuilder":
        return RequestBuilder(amount)

    def send(self, client: "OpenTDB") -> List["Question"]:
        return client.send(self)

    def send_async(self, client: "OpenTDB") -> Awaitable[List["Question"]]:
        return client.send_async(self)


class RequestBuilder:
    def __init__(self, amount: int) -> None:
        _check_amount(amount)
        self._amount = amount
        self._category: Optional[Category] = None
        self._type: Optional[QuestionType] = None
        self._difficulty: Optional[Difficulty] = None

    def from_category(self, category: Optional[Category]) -> "RequestBuilder":
        self._category = category
        return self

    def of_type(self, question_type: Optional[QuestionType]) -> "RequestBuilder":
        self._type = question_type
        return self

    def of_difficulty(self, difficulty: Optional[Difficulty]) -> "RequestBuilder":
        self._difficulty = difficulty
        return self

    def build(self) -> Request:
        return Request(
            amount=self._amount,
            category=self._category,
            type=self._type,
            difficulty=self._difficulty,
        )
