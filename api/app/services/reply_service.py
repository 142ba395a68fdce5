"""
Reply service.
"""
import logging
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.core.security import ensure_author
from app.models.models import Reply
from app.schemas.auth import Identity
from app.services.question_service import get_question, BODY_REQUIRED
from app.services.validation import clean_text

logger = logging.getLogger(__name__)


def get_reply(session: Session, reply_id: int) -> Reply:
    reply = session.get(Reply, reply_id)
    if not reply:
        raise NotFoundError("Reply not found")
    return reply


def add_reply(session: Session, identity: Identity, question_id: int, body: str) -> Reply:
    """Append a reply to a question."""
    get_question(session, question_id)
    reply = Reply(
        question_id=question_id,
        body=clean_text(body, BODY_REQUIRED),
        author=identity.username,
    )
    session.add(reply)
    session.commit()
    session.refresh(reply)

    logger.info(f"User {identity.username} replied {reply.id} to question {question_id}")
    return reply


def update_reply(session: Session, identity: Identity, reply_id: int, body: str) -> Reply:
    reply = get_reply(session, reply_id)
    ensure_author(reply.author, identity)

    reply.body = clean_text(body, BODY_REQUIRED)
    session.add(reply)
    session.commit()
    session.refresh(reply)

    logger.info(f"User {identity.username} updated reply {reply.id}")
    return reply


def delete_reply(session: Session, identity: Identity, reply_id: int) -> None:
    reply = get_reply(session, reply_id)
    ensure_author(reply.author, identity)

    session.delete(reply)
    session.commit()

    logger.info(f"User {identity.username} deleted reply {reply_id}")
