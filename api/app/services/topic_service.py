"""
Topic service for listing and editing topics.
"""
import logging
from typing import List, Optional
from sqlmodel import Session, select

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models.models import Topic, Question
from app.schemas.auth import Identity
from app.services.validation import clean_color, clean_text, clean_optional_text

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title required"


def list_topics(session: Session) -> List[Topic]:
    """All topics, most recent first."""
    query = select(Topic).order_by(Topic.created_at.desc(), Topic.id.desc())  # type: ignore
    return list(session.exec(query).all())


def get_topic(session: Session, topic_id: int) -> Topic:
    topic = session.get(Topic, topic_id)
    if not topic:
        raise NotFoundError("Topic not found")
    return topic


def create_topic(session: Session, identity: Identity, title: str, color: Optional[str] = None) -> Topic:
    """Create a topic. Any signed-in user may do so; no owner is stored."""
    topic = Topic(
        title=clean_text(title, TITLE_REQUIRED),
        color=clean_color(color, settings.default_topic_color),
    )
    session.add(topic)
    session.commit()
    session.refresh(topic)

    logger.info(f"User {identity.username} created topic {topic.id} ({topic.title})")
    return topic


def update_topic(
    session: Session,
    identity: Identity,
    topic_id: int,
    title: Optional[str] = None,
    color: Optional[str] = None
) -> Topic:
    """Update title and/or color; omitted fields keep their value."""
    topic = get_topic(session, topic_id)

    new_title = clean_optional_text(title, TITLE_REQUIRED)
    new_color = clean_color(color)
    if new_title is not None:
        topic.title = new_title
    if new_color is not None:
        topic.color = new_color

    session.add(topic)
    session.commit()
    session.refresh(topic)

    logger.info(f"User {identity.username} updated topic {topic.id}")
    return topic


def find_fallback_topic(session: Session, excluded_id: int) -> Topic:
    """Oldest topic other than excluded_id, created on demand if none exists."""
    fallback = session.exec(
        select(Topic)
        .where(Topic.id != excluded_id)
        .order_by(Topic.created_at.asc(), Topic.id.asc())  # type: ignore
    ).first()
    if fallback is None:
        fallback = Topic(title=settings.fallback_topic_title, color=settings.default_topic_color)
        session.add(fallback)
        session.flush()
    return fallback


def delete_topic(session: Session, identity: Identity, topic_id: int) -> int:
    """
    Delete a topic, moving its questions to a fallback topic.

    Questions are moved to the oldest remaining topic, or to a new
    fallback topic when no other topic exists. The move and the delete
    share one transaction.

    Returns:
        Number of questions that were moved
    """
    topic = get_topic(session, topic_id)

    dependents = session.exec(select(Question).where(Question.topic_id == topic_id)).all()
    try:
        if dependents:
            fallback = find_fallback_topic(session, topic_id)
            for question in dependents:
                question.topic_id = fallback.id
                session.add(question)
            session.flush()
            logger.info(
                f"Moved {len(dependents)} questions from topic {topic_id} to topic {fallback.id}"
            )
        session.delete(topic)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"User {identity.username} deleted topic {topic_id}")
    return len(dependents)
