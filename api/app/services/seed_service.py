"""
Seed service for demo content in an empty database.
"""
import logging
from sqlalchemy import func
from sqlmodel import Session, select

from app.core.security import get_password_hash
from app.models.models import User, Topic, Question, Reply

logger = logging.getLogger(__name__)

DEMO_TOPICS = [
    ("JavaScript", "#8aa2ff"),
    ("Python", "#00d1b2"),
    ("Web", "#f6c945"),
]
DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo1234"
DEMO_QUESTION = {
    "topic": "Web",
    "title": "How do I link a CSS file to an HTML page?",
    "body": "What is the basic way to attach a stylesheet to an HTML page?",
    "reply": 'Put <link rel="stylesheet" href="style.css"> inside the <head> section.',
}


def _is_empty(session: Session, model) -> bool:
    return session.exec(select(func.count()).select_from(model)).one() == 0


def seed_demo_data(session: Session) -> bool:
    """
    Insert demo topics, a demo user and a demo question.

    Each part is only seeded when its table is empty.

    Returns:
        True if anything was inserted
    """
    seeded = False

    if _is_empty(session, Topic):
        for title, color in DEMO_TOPICS:
            session.add(Topic(title=title, color=color))
        seeded = True

    if _is_empty(session, User):
        session.add(User(username=DEMO_USERNAME, password_hash=get_password_hash(DEMO_PASSWORD)))
        seeded = True

    if _is_empty(session, Question):
        session.flush()
        topic = session.exec(select(Topic).where(Topic.title == DEMO_QUESTION["topic"])).first()
        if topic is None:
            topic = session.exec(select(Topic).order_by(Topic.id)).first()
        if topic is not None:
            question = Question(
                title=DEMO_QUESTION["title"],
                body=DEMO_QUESTION["body"],
                topic_id=topic.id,
                author=DEMO_USERNAME,
            )
            session.add(question)
            session.flush()
            session.add(Reply(question_id=question.id, body=DEMO_QUESTION["reply"], author=DEMO_USERNAME))
            seeded = True

    if seeded:
        session.commit()
        logger.info("Seeded demo data")
    return seeded
