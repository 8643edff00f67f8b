"""Service for loading sample content into an empty database."""
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session as DbSession

from api.models.db import Category, Question, QuizTest

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [
    ("Current Affairs", "Stay updated with the latest events and news around the world."),
    ("General Knowledge", "Test your awareness about various general topics and trivia."),
    ("Science & Technology", "Explore the world of science and technological advancements."),
    ("History", "Journey through important historical events and facts."),
    ("Sports", "Challenge your knowledge about various sports and athletes."),
    ("Entertainment", "Test your knowledge of movies, music, and pop culture."),
]

# (name, category position in SAMPLE_CATEGORIES, time limit in minutes)
SAMPLE_TESTS = [
    ("Weekly Current Affairs: August 1-7, 2023", 0, 15),
    ("International Relations Quiz", 0, 20),
    ("Economic Policies & Developments", 0, 12),
    ("Global Leaders & Politics", 0, 18),
    ("General Science Quiz", 2, 15),
    ("Technology Innovations 2023", 2, 20),
]

# (test position in SAMPLE_TESTS, text, options, correct option, explanation)
SAMPLE_QUESTIONS = [
    (
        0,
        "Which country hosted the G7 Summit in 2023?",
        ["United States", "Japan", "Germany", "Italy"],
        1,
        "The G7 Summit was held in Hiroshima, Japan in May 2023.",
    ),
    (
        0,
        "Which technology company announced its 'Copilot' AI assistant in 2023?",
        ["Google", "Apple", "Microsoft", "Meta"],
        2,
        "Microsoft announced its 'Copilot' AI assistant for various products in 2023.",
    ),
    (
        0,
        "Which country became the fourth nation to land on the moon in August 2023?",
        ["China", "India", "Israel", "United Arab Emirates"],
        1,
        "India became the fourth country to successfully land on the moon "
        "with its Chandrayaan-3 mission.",
    ),
    (
        1,
        "Which organization oversees international trade regulations?",
        ["IMF", "World Bank", "WTO", "UNICEF"],
        2,
        "The World Trade Organization (WTO) is responsible for regulating "
        "international trade.",
    ),
]


def seed_sample_data(db: DbSession) -> bool:
    """Insert sample content when no category exists yet. Returns True if seeded."""
    existing = db.execute(select(func.count(Category.id))).scalar() or 0
    if existing:
        return False

    categories = [Category(name=name, description=description) for name, description in SAMPLE_CATEGORIES]
    db.add_all(categories)
    db.flush()

    tests = [
        QuizTest(name=name, category_id=categories[position].id, time_limit=time_limit)
        for name, position, time_limit in SAMPLE_TESTS
    ]
    db.add_all(tests)
    db.flush()

    for position, text, options, correct_option, explanation in SAMPLE_QUESTIONS:
        question = Question(
            test_id=tests[position].id,
            text=text,
            correct_option=correct_option,
            explanation=explanation,
        )
        question.options = options
        db.add(question)

    db.commit()
    logger.info(
        f"Seeded {len(categories)} categories, {len(tests)} tests "
        f"and {len(SAMPLE_QUESTIONS)} questions"
    )
    return True
