import dataclasses
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from opentdb.categories import Category
from opentdb.errors import ValidationError
from opentdb.parameters import Difficulty, QuestionType
from opentdb.request import Request


class RequestTests(unittest.TestCase):
    def test_non_positive_amount_is_rejected(self):
        for amount in (0, -1, -50):
            with self.subTest(amount=amount):
                with self.assertRaises(ValidationError):
                    Request.new_request(amount)
                with self.assertRaises(ValidationError):
                    Request.new_builder(amount)

    def test_positive_amount_round_trips(self):
        # Above 50 is accepted locally even though the service caps results.
        for amount in (1, 10, 50, 51, 500):
            with self.subTest(amount=amount):
                request = Request.new_request(amount)
                self.assertEqual(request.amount, amount)
                self.assertIsNone(request.category)
                self.assertIsNone(request.type)
                self.assertIsNone(request.difficulty)

    def test_bool_amount_is_rejected(self):
        with self.assertRaises(ValidationError):
            Request.new_request(True)

    def test_builder_chains_and_snapshots(self):
        category = Category(id=9, name="General Knowledge")
        builder = Request.new_builder(5)
        self.assertIs(builder.from_category(category), builder)
        self.assertIs(builder.of_type(QuestionType.BOOLEAN), builder)
        self.assertIs(builder.of_difficulty(Difficulty.EASY), builder)
        first = builder.build()

        builder.of_type(None).of_difficulty(None)
        second = builder.build()

        self.assertEqual(first.category, category)
        self.assertEqual(first.type, QuestionType.BOOLEAN)
        self.assertEqual(first.difficulty, Difficulty.EASY)
        self.assertIsNone(second.type)
        self.assertIsNone(second.difficulty)
        self.assertEqual(second.category, category)

    def test_request_is_immutable(self):
        request = Request.new_request(3)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            request.amount = 4

    def test_category_without_id_cannot_filter(self):
        with self.assertRaises(ValidationError):
            Request.new_builder(1).from_category(Category(id=None, name="Mystery")).build()


if __name__ == "__main__":
    unittest.main()
