#!/usr/bin/env python3
"""Small CLI demo that fetches a few trivia questions."""

from __future__ import annotations

import argparse
import logging

from opentdb import Difficulty, EncodingType, OpenTDB, QuestionType, Request


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch questions from the Open Trivia Database.")
    parser.add_argument("--amount", type=int, default=5, help="Number of questions to fetch.")
    parser.add_argument("--category", help="Category name, e.g. 'Science & Nature'.")
    parser.add_argument("--type", choices=[t.value for t in QuestionType], help="Question type.")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], help="Question difficulty.")
    parser.add_argument(
        "--encoding",
        choices=[e.name for e in EncodingType],
        default=EncodingType.HTML_CODES.name,
        help="Encoding the service should apply to text.",
    )
    parser.add_argument("--no-token", action="store_true", help="Do not request a session token.")
    parser.add_argument("--verbose", action="store_true", help="Log wire traffic.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    with (
        OpenTDB.builder()
        .set_encoding(EncodingType[args.encoding])
        .use_session_token(not args.no_token)
        .build()
    ) as client:
        client.await_token(timeout=30)

        builder = Request.new_builder(args.amount)
        if args.category:
            client.refresh_categories()
            category = client.categories.by_name(args.category)
            if category is None:
                parser.error(f"Unknown category: {args.category}")
            builder.from_category(category)
        builder.of_type(QuestionType(args.type) if args.type else None)
        builder.of_difficulty(Difficulty(args.difficulty) if args.difficulty else None)

        for question in client.send(builder.build()):
            print(question)
            if question.type is QuestionType.BOOLEAN:
                print("  answer:", question.to_boolean().correct_answer)
            else:
                multiple = question.to_multiple()
                print("  answer:", multiple.correct_answer)
                print("  wrong: ", ", ".join(multiple.incorrect_answers))


if __name__ == "__main__":
    main()
