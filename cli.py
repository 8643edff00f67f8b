import argparse
import asyncio
import threading

from fastapi import HTTPException

from api.config import LOG_LEVEL
from api.database import SessionLocal, init_db
from api.models.db import Category, Question, QuizTest
from api.repositories import SqlRepository
from api.services.seed_service import seed_sample_data
from api.services.test_service import load_question_set
from core.errors import QuizSessionError
from core.logging_setup import setup_console_logging
from core.models import QuestionSet, SessionPhase
from core.session import QuizSession

OPTION_LETTERS = "ABCD"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage and take quizzes")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed", help="Load sample content into an empty database")
    sub.add_parser("list", help="List categories and their tests")

    take = sub.add_parser("take", help="Take a test in the terminal")
    take.add_argument("test_id", type=int, help="Test identifier")
    return parser.parse_args(argv)


def format_seconds(seconds: int | None) -> str:
    if seconds is None:
        return "untimed"
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def parse_answer(raw: str) -> int | None:
    """Map 'a'..'d' or '1'..'4' to an option index."""
    value = raw.strip().upper()
    if len(value) != 1:
        return None
    if value in OPTION_LETTERS:
        return OPTION_LETTERS.index(value)
    if value.isdigit() and 1 <= int(value) <= len(OPTION_LETTERS):
        return int(value) - 1
    return None


async def _prompt(text: str) -> str | None:
    """Read a line on a daemon thread so an expired quiz never waits on stdin."""
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _resolve(value: str | None) -> None:
        if not future.done():
            future.set_result(value)

    def _read() -> None:
        try:
            value = input(text)
        except EOFError:
            value = None
        try:
            loop.call_soon_threadsafe(_resolve, value)
        except RuntimeError:
            pass  # loop already closed

    threading.Thread(target=_read, name="quiz_input", daemon=True).start()
    return await future


async def run_quiz(question_set: QuestionSet) -> QuizSession:
    """Drive a session from stdin until it completes or time runs out."""
    finished = asyncio.Event()
    session = QuizSession(question_set)
    session.on_phase_change(lambda phase, _: finished.set())

    with session:
        print(f"{question_set.test_name} - time limit: {format_seconds(session.remaining_seconds)}")
        while not session.is_completed:
            question = session.current_question
            print()
            print(f"Question {session.current_index + 1} of {len(session.questions)}"
                  f" [{format_seconds(session.remaining_seconds)}]")
            print(question.text)
            for letter, option in zip(OPTION_LETTERS, question.options):
                print(f"  {letter}) {option}")

            prompt = asyncio.ensure_future(_prompt("Your answer: "))
            waiter = asyncio.ensure_future(finished.wait())
            done, _ = await asyncio.wait(
                {prompt, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
            waiter.cancel()
            if prompt not in done:
                # Time ran out; the pending input() is abandoned
                print("\nTime is up!")
                break

            answer = prompt.result()
            if answer is None:
                break
            index = parse_answer(answer)
            if index is None:
                print("Please answer with A, B, C or D.")
                continue
            try:
                session.select_option(index)
            except QuizSessionError as e:
                print(e)
                continue

            feedback = session.feedback()
            if feedback.is_correct:
                print("Correct!")
            else:
                correct = feedback.correct_option
                print(f"Incorrect. The correct answer is "
                      f"{OPTION_LETTERS[correct]}: {question.options[correct]}")
            if feedback.explanation:
                print(feedback.explanation)
            session.advance()

    return session


def print_summary(session: QuizSession) -> None:
    print()
    print(f"Score: {session.score}/{len(session.questions)} "
          f"({session.accuracy_percent}%) in {format_seconds(session.elapsed_seconds)}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_console_logging(LOG_LEVEL)
    init_db()

    db = SessionLocal()
    try:
        if args.command == "seed":
            if seed_sample_data(db):
                print("Sample content loaded")
            else:
                print("Database already has content; nothing to do")
            return 0

        categories = SqlRepository(db, Category)
        tests = SqlRepository(db, QuizTest)
        if args.command == "list":
            for category in categories.list():
                print(f"[{category.id}] {category.name}")
                for test in tests.list(category_id=category.id):
                    limit = f"{test.time_limit} min" if test.time_limit else "untimed"
                    print(f"    {test.id}: {test.name} ({limit})")
            return 0

        try:
            question_set = load_question_set(
                tests, SqlRepository(db, Question), args.test_id
            )
        except HTTPException as e:
            print(e.detail)
            return 1
    finally:
        db.close()

    try:
        session = asyncio.run(run_quiz(question_set))
    except QuizSessionError as e:
        print(e)
        return 1
    print_summary(session)
    return 0 if session.phase == SessionPhase.COMPLETED else 1


if __name__ == "__main__":
    raise SystemExit(main())
