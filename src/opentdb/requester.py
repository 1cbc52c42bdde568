"""Turns ``Request`` values into wire calls and replies into questions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional, Tuple

from . import config
from .categories import CategoryLookup
from .errors import QuestionDecodeError
from .parameters import Difficulty, EncodingType, QuestionType
from .payloads import QuestionPayload, QuestionsEnvelope, ResponseHeader, parse_payload
from .questions import BooleanQuestion, MultipleChoiceQuestion, Question
from .request import Request
from .response_codes import ResponseCode
from .tokens import SessionTokenManager
from .transport import Transport

logger = logging.getLogger(__name__)

QUERY_PARAM_AMOUNT = "amount"
QUERY_PARAM_TOKEN = "token"


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise QuestionDecodeError(f"Expected 'True' or 'False', got {value!r}.")


def decode_question(
    payload: QuestionPayload,
    encoding: EncodingType,
    categories: CategoryLookup,
) -> Question:
    """Build a question from one element of ``results``.

    Every string is first decoded with ``encoding``. Unknown question types
    and difficulties are rejected.
    """

    def decode(text: str) -> str:
        try:
            return encoding.decode(text)
        except ValueError as exc:
            raise QuestionDecodeError(
                f"Could not decode {text!r} as {encoding.readable_name}."
            ) from exc

    raw_type = decode(payload.type)
    try:
        question_type = QuestionType(raw_type.lower())
    except ValueError:
        raise QuestionDecodeError(f"Unrecognized question type {raw_type!r}.") from None

    raw_difficulty = decode(payload.difficulty)
    try:
        difficulty = Difficulty(raw_difficulty.lower())
    except ValueError:
        raise QuestionDecodeError(f"Unrecognized difficulty {raw_difficulty!r}.") from None

    category = categories.resolve(decode(payload.category))
    text = decode(payload.question)

    if question_type is QuestionType.BOOLEAN:
        correct = _parse_bool(decode(payload.correct_answer))
        for answer in payload.incorrect_answers:
            if _parse_bool(decode(answer)) == correct:
                raise QuestionDecodeError(
                    f"Boolean question lists {answer!r} as both correct and incorrect."
                )
        return BooleanQuestion(
            category=category,
            difficulty=difficulty,
            text=text,
            correct_answer=correct,
            incorrect_answer=not correct,
        )
    if question_type is QuestionType.MULTIPLE:
        return MultipleChoiceQuestion(
            category=category,
            difficulty=difficulty,
            text=text,
            correct_answer=decode(payload.correct_answer),
            incorrect_answers=tuple(decode(answer) for answer in payload.incorrect_answers),
        )
    raise QuestionDecodeError(f"No decoder for question type {question_type!r}.")


class Requester:
    def __init__(
        self,
        transport: Transport,
        tokens: SessionTokenManager,
        encoding: EncodingType = EncodingType.HTML_CODES,
        categories: Optional[CategoryLookup] = None,
    ) -> None:
        self.transport = transport
        self.tokens = tokens
        self.encoding = encoding
        self.categories = categories or CategoryLookup()

    def build_params(self, request: Request) -> List[Tuple[str, str]]:
        """Query parameters for ``request``, in wire order.

        ``encode`` is always sent, even with an empty value. Filters that
        are not set and a missing token are left out entirely.
        """
        params = [
            (self.encoding.parameter_name, self.encoding.parameter_value),
            (QUERY_PARAM_AMOUNT, str(request.amount)),
        ]
        for option in (request.category, request.type, request.difficulty):
            if option is not None:
                params.append((option.parameter_name, option.parameter_value))
        # token is disabled or has not been fetched yet
        token = self.tokens.token
        if token is not None:
            params.append((QUERY_PARAM_TOKEN, token))
        return params

    def _log_outgoing(self, params: List[Tuple[str, str]]) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            shown = [(name, "***" if name == QUERY_PARAM_TOKEN else value) for name, value in params]
            logger.debug("GET %s %s", self.transport.url_for(config.QUESTION_PATH), shown)

    def send(self, request: Request) -> List[Question]:
        params = self.build_params(request)
        self._log_outgoing(params)
        body = self.transport.get_json(config.QUESTION_PATH, params)
        return self.handle_response(body)

    async def send_async(self, request: Request) -> List[Question]:
        params = self.build_params(request)
        self._log_outgoing(params)
        body = await self.transport.get_json_async(config.QUESTION_PATH, params)
        return self.handle_response(body)

    def handle_response(self, body: Any, now: Optional[datetime] = None) -> List[Question]:
        header = parse_payload(ResponseHeader, body)
        response_code = ResponseCode.from_code(header.response_code)
        if response_code is not ResponseCode.SUCCESS:
            raise self.tokens.error_for(response_code, header.response_code, now)

        envelope = parse_payload(QuestionsEnvelope, body, error=QuestionDecodeError)
        questions: List[Question] = []
        for payload in envelope.results:
            question = decode_question(payload, self.encoding, self.categories)
            logger.debug("Fetched question %s", question)
            questions.append(question)
        return questions
