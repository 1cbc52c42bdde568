import base64
import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from opentdb.categories import Category, CategoryLookup
from opentdb.errors import ErrorResponse, QuestionDecodeError, TransportError
from opentdb.parameters import Difficulty, EncodingType, QuestionType
from opentdb.questions import BooleanQuestion, MultipleChoiceQuestion
from opentdb.request import Request
from opentdb.requester import Requester
from opentdb.response_codes import ResponseCode
from opentdb.tokens import SessionTokenManager
from opentdb.transport import Transport

SCIENCE = Category(id=17, name="Science & Nature")


def result(**overrides):
    item = {
        "type": "multiple",
        "category": "Science & Nature",
        "difficulty": "medium",
        "question": "What is H2O?",
        "correct_answer": "Water",
        "incorrect_answers": ["A", "B", "C"],
    }
    item.update(overrides)
    return item


def b64(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class RequesterParamsTests(unittest.TestCase):
    def setUp(self):
        self.transport = Transport(base_url="https://opentdb.test")
        self.tokens = SessionTokenManager(self.transport)
        self.requester = Requester(self.transport, self.tokens)

    def test_amount_only_omits_filters(self):
        params = self.requester.build_params(Request.new_request(5))
        self.assertEqual(params, [("encode", ""), ("amount", "5")])

    def test_subset_of_filters_in_order(self):
        request = (
            Request.new_builder(10)
            .from_category(Category(id=9, name="General Knowledge"))
            .of_difficulty(Difficulty.HARD)
            .build()
        )
        self.assertEqual(
            self.requester.build_params(request),
            [("encode", ""), ("amount", "10"), ("category", "9"), ("difficulty", "hard")],
        )

    def test_all_filters_and_token(self):
        self.tokens.activate("tok")
        requester = Requester(self.transport, self.tokens, EncodingType.BASE_64)
        request = (
            Request.new_builder(2)
            .of_difficulty(Difficulty.EASY)
            .of_type(QuestionType.BOOLEAN)
            .from_category(SCIENCE)
            .build()
        )
        self.assertEqual(
            requester.build_params(request),
            [
                ("encode", "base64"),
                ("amount", "2"),
                ("category", "17"),
                ("type", "boolean"),
                ("difficulty", "easy"),
                ("token", "tok"),
            ],
        )


class RequesterResponseTests(unittest.TestCase):
    def setUp(self):
        self.transport = Transport(base_url="https://opentdb.test")
        self.tokens = SessionTokenManager(self.transport)
        self.categories = CategoryLookup([SCIENCE])
        self.requester = Requester(self.transport, self.tokens, categories=self.categories)

    def test_boolean_result(self):
        body = {
            "response_code": 0,
            "results": [
                result(type="boolean", question="The sun is a star.", correct_answer="True", incorrect_answers=["False"])
            ],
        }
        [question] = self.requester.handle_response(body)
        self.assertIsInstance(question, BooleanQuestion)
        self.assertIs(question.correct_answer, True)
        self.assertIs(question.incorrect_answer, False)
        self.assertEqual(question.category, SCIENCE)
        self.assertEqual(question.difficulty, Difficulty.MEDIUM)

    def test_boolean_incorrect_answer_is_negation(self):
        body = {"response_code": 0, "results": [result(type="boolean", correct_answer="False", incorrect_answers=[])]}
        [question] = self.requester.handle_response(body)
        self.assertIs(question.correct_answer, False)
        self.assertIs(question.incorrect_answer, True)

    def test_boolean_with_contradicting_answers_fails_decoding(self):
        body = {
            "response_code": 0,
            "results": [result(type="boolean", correct_answer="True", incorrect_answers=["True"])],
        }
        with self.assertRaises(QuestionDecodeError):
            self.requester.handle_response(body)

    def test_multiple_choice_keeps_wire_order(self):
        body = {"response_code": 0, "results": [result(incorrect_answers=["A", "B", "C"])]}
        [question] = self.requester.handle_response(body)
        self.assertIsInstance(question, MultipleChoiceQuestion)
        self.assertEqual(list(question.incorrect_answers), ["A", "B", "C"])
        self.assertEqual(question.correct_answer, "Water")

    def test_html_entities_are_decoded(self):
        body = {"response_code": 0, "results": [result(question="&quot;Hi&quot; means?", correct_answer="Hello &amp; welcome")]}
        [question] = self.requester.handle_response(body)
        self.assertEqual(question.text, '"Hi" means?')
        self.assertEqual(question.correct_answer, "Hello & welcome")

    def test_base64_results_are_decoded(self):
        requester = Requester(self.transport, self.tokens, EncodingType.BASE_64, self.categories)
        body = {
            "response_code": 0,
            "results": [
                {
                    "type": b64("boolean"),
                    "category": b64("Science & Nature"),
                    "difficulty": b64("hard"),
                    "question": b64("Water boils at 100C at sea level."),
                    "correct_answer": b64("True"),
                    "incorrect_answers": [b64("False")],
                }
            ],
        }
        [question] = requester.handle_response(body)
        self.assertIs(question.to_boolean().correct_answer, True)
        self.assertEqual(question.category, SCIENCE)
        self.assertEqual(question.difficulty, Difficulty.HARD)

    def test_unknown_category_keeps_name(self):
        body = {"response_code": 0, "results": [result(category="Vehicles")]}
        [question] = self.requester.handle_response(body)
        self.assertIsNone(question.category.id)
        self.assertEqual(question.category.name, "Vehicles")

    def test_unrecognized_type_fails_decoding(self):
        body = {"response_code": 0, "results": [result(type="matching")]}
        with self.assertRaises(QuestionDecodeError):
            self.requester.handle_response(body)

    def test_malformed_result_fails_decoding(self):
        body = {"response_code": 0, "results": [{"type": "multiple"}]}
        with self.assertRaises(QuestionDecodeError):
            self.requester.handle_response(body)

    def test_error_codes_raise_with_stock_message(self):
        for raw, member in ((1, ResponseCode.NO_RESULTS), (2, ResponseCode.INVALID_PARAMETER), (4, ResponseCode.TOKEN_EMPTY)):
            with self.subTest(raw=raw):
                with self.assertRaises(ErrorResponse) as ctx:
                    self.requester.handle_response({"response_code": raw, "results": []})
                self.assertIs(ctx.exception.response_code, member)
                self.assertEqual(str(ctx.exception), f"{raw}: {member.meaning}")

    def test_unrecognized_response_code(self):
        with self.assertRaises(ErrorResponse) as ctx:
            self.requester.handle_response({"response_code": 5, "results": []})
        self.assertIs(ctx.exception.response_code, ResponseCode.UNKNOWN)
        self.assertIn("5", str(ctx.exception))

    def test_token_not_found_after_six_hours_mentions_inactivity(self):
        issued = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        self.tokens.activate("tok", issued_at=issued)
        with self.assertRaises(ErrorResponse) as ctx:
            self.requester.handle_response({"response_code": 3, "results": []}, now=issued + timedelta(hours=7))
        self.assertIs(ctx.exception.response_code, ResponseCode.TOKEN_NOT_FOUND)
        self.assertIn("6 hours of inactivity", str(ctx.exception))

    def test_token_not_found_within_window_uses_stock_message(self):
        issued = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        self.tokens.activate("tok", issued_at=issued)
        with self.assertRaises(ErrorResponse) as ctx:
            self.requester.handle_response({"response_code": 3, "results": []}, now=issued + timedelta(hours=1))
        self.assertIs(ctx.exception.response_code, ResponseCode.TOKEN_NOT_FOUND)
        self.assertEqual(str(ctx.exception), "3: Token Not Found")


class RequesterSendTests(unittest.TestCase):
    def setUp(self):
        self.seen = []
        self.fail_with = None
        self.http_client = httpx.Client(transport=httpx.MockTransport(self._handle))
        self.transport = Transport(base_url="https://opentdb.test", http_client=self.http_client)
        self.tokens = SessionTokenManager(self.transport, enabled=False)
        self.requester = Requester(self.transport, self.tokens)

    def tearDown(self):
        self.http_client.close()

    def _handle(self, request):
        self.seen.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        return httpx.Response(200, json={"response_code": 0, "results": [result()]})

    def test_send_hits_question_endpoint(self):
        questions = self.requester.send(Request.new_request(1))
        self.assertEqual(len(questions), 1)
        sent = self.seen[0]
        self.assertEqual(sent.method, "GET")
        self.assertEqual(sent.url.path, "/api.php")
        self.assertEqual(sent.url.params.multi_items(), [("encode", ""), ("amount", "1")])

    def test_transport_failure_is_wrapped_as_unknown(self):
        self.fail_with = httpx.ConnectError("connection refused")
        with self.assertRaises(TransportError) as ctx:
            self.requester.send(Request.new_request(1))
        self.assertIsInstance(ctx.exception, ErrorResponse)
        self.assertIs(ctx.exception.response_code, ResponseCode.UNKNOWN)

    def test_closed_borrowed_client_is_not_replaced(self):
        self.http_client.close()
        with self.assertRaises(TransportError):
            self.requester.send(Request.new_request(1))
        self.assertEqual(self.seen, [])


if __name__ == "__main__":
    unittest.main()
