"""Question variants returned by the service.

A question is either a ``MultipleChoiceQuestion`` or a ``BooleanQuestion``.
Both share category, difficulty and text; they differ in the shape of
their answers. The ``type`` discriminator is fixed per class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .categories import Category
from .errors import InvalidNarrowingError
from .parameters import Difficulty, QuestionType


@dataclass(frozen=True)
class _QuestionBase:
    category: Category
    difficulty: Difficulty
    text: str

    @property
    def type(self) -> QuestionType:
        raise NotImplementedError

    def to_multiple(self) -> "MultipleChoiceQuestion":
        """Narrow to the multiple-choice view, failing for any other variant."""
        if not isinstance(self, MultipleChoiceQuestion):
            raise InvalidNarrowingError(
                f"{self.type.value} question cannot be viewed as a multiple choice question."
            )
        return self

    def to_boolean(self) -> "BooleanQuestion":
        """Narrow to the true/false view, failing for any other variant."""
        if not isinstance(self, BooleanQuestion):
            raise InvalidNarrowingError(
                f"{self.type.value} question cannot be viewed as a boolean question."
            )
        return self

    def __str__(self) -> str:
        return f"Q:{self.text}({self.category}/{self.type.name}/{self.difficulty.name})"


@dataclass(frozen=True)
class MultipleChoiceQuestion(_QuestionBase):
    correct_answer: str
    incorrect_answers: Tuple[str, ...]

    @property
    def type(self) -> QuestionType:
        return QuestionType.MULTIPLE

    def is_correct_answer(self, answer: str) -> bool:
        return answer == self.correct_answer


@dataclass(frozen=True)
class BooleanQuestion(_QuestionBase):
    correct_answer: bool
    incorrect_answer: bool

    def __post_init__(self) -> None:
        if self.incorrect_answer == self.correct_answer:
            raise ValueError("A boolean question's incorrect answer must negate its correct answer.")

    @property
    def type(self) -> QuestionType:
        return QuestionType.BOOLEAN

    @property
    def incorrect_answers(self) -> bool:
        return self.incorrect_answer

    def is_correct_answer(self, answer: bool) -> bool:
        return answer == self.correct_answer


Question = Union[MultipleChoiceQuestion, BooleanQuestion]
