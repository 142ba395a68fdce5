"""
Question service for listing, reading and editing questions.
"""
import logging
from typing import List, Optional
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import ensure_author
from app.models.models import Question, Reply, Topic, QuestionSort
from app.schemas.auth import Identity
from app.schemas.question import QuestionResponse, QuestionDetailResponse, ReplyResponse
from app.services.filter_service import build_question_query
from app.services.validation import clean_text, clean_optional_text

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title required"
BODY_REQUIRED = "Body required"


def list_questions(
    session: Session,
    search: Optional[str] = None,
    topic_id: Optional[int] = None,
    sort: QuestionSort = QuestionSort.NEWEST
) -> List[QuestionResponse]:
    """
    List questions matching a search term and topic, in the requested order.

    Args:
        session: Database session
        search: Case-insensitive substring of the title or body
        topic_id: Restrict to one topic; None lists every topic
        sort: Newest first, oldest first or most replies first

    Returns:
        Questions with their reply counts
    """
    rows = session.exec(build_question_query(search, topic_id, sort)).all()
    return [
        QuestionResponse(**question.model_dump(), reply_count=reply_count)
        for question, reply_count in rows
    ]


def get_question(session: Session, question_id: int) -> Question:
    question = session.get(Question, question_id)
    if not question:
        raise NotFoundError("Question not found")
    return question


def list_replies(session: Session, question_id: int) -> List[Reply]:
    """Replies of a question, oldest first."""
    query = (
        select(Reply)
        .where(Reply.question_id == question_id)
        .order_by(Reply.created_at.asc(), Reply.id.asc())  # type: ignore
    )
    return list(session.exec(query).all())


def get_question_detail(session: Session, question_id: int) -> QuestionDetailResponse:
    """A question together with its replies."""
    question = get_question(session, question_id)
    replies = [ReplyResponse.model_validate(reply) for reply in list_replies(session, question_id)]
    return QuestionDetailResponse(
        **question.model_dump(),
        reply_count=len(replies),
        replies=replies,
    )


def ensure_topic_exists(session: Session, topic_id: int) -> None:
    if session.get(Topic, topic_id) is None:
        raise ValidationError(f"Unknown topic: {topic_id}")


def create_question(
    session: Session,
    identity: Identity,
    title: str,
    body: str,
    topic_id: int
) -> Question:
    """Ask a question as the given user."""
    title = clean_text(title, TITLE_REQUIRED)
    body = clean_text(body, BODY_REQUIRED)
    ensure_topic_exists(session, topic_id)

    question = Question(title=title, body=body, topic_id=topic_id, author=identity.username)
    session.add(question)
    session.commit()
    session.refresh(question)

    logger.info(f"User {identity.username} asked question {question.id} in topic {topic_id}")
    return question


def update_question(
    session: Session,
    identity: Identity,
    question_id: int,
    title: Optional[str] = None,
    body: Optional[str] = None,
    topic_id: Optional[int] = None
) -> Question:
    """Edit the supplied fields of a question. Only its author may do so."""
    question = get_question(session, question_id)
    ensure_author(question.author, identity)

    new_title = clean_optional_text(title, TITLE_REQUIRED)
    new_body = clean_optional_text(body, BODY_REQUIRED)
    if topic_id is not None:
        ensure_topic_exists(session, topic_id)
        question.topic_id = topic_id
    if new_title is not None:
        question.title = new_title
    if new_body is not None:
        question.body = new_body

    session.add(question)
    session.commit()
    session.refresh(question)

    logger.info(f"User {identity.username} updated question {question.id}")
    return question


def delete_question(session: Session, identity: Identity, question_id: int) -> int:
    """
    Delete a question and all of its replies in one transaction.

    Returns:
        Number of replies deleted along with the question
    """
    question = get_question(session, question_id)
    ensure_author(question.author, identity)

    replies = list_replies(session, question_id)
    try:
        for reply in replies:
            session.delete(reply)
        session.flush()
        session.delete(question)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"User {identity.username} deleted question {question_id} with {len(replies)} replies")
    return len(replies)
