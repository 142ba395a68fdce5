"""
Filter service for parsing and applying question filters.
"""
from sqlalchemy import func, or_
from sqlmodel import select
from typing import Callable, Optional, TypeVar

from app.core.exceptions import ValidationError
from app.models.models import Question, Reply, QuestionSort

T = TypeVar("T")

ALL_TOPICS = "all"


# ============================================================================
# Parameter Parsing Helpers
# ============================================================================

def parse_sort(sort: Optional[str]) -> QuestionSort:
    """Parse the sort parameter; missing means newest first."""
    if sort is None or not str(sort).strip():
        return QuestionSort.NEWEST
    try:
        return QuestionSort(sort)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in QuestionSort)
        raise ValidationError(f"Invalid sort: {sort}. Must be one of: {allowed}") from exc


def parse_topic_filter(topic_id, cast: Callable[[str], T] = int) -> Optional[T]:
    """
    Parse the topic filter: "all" (or nothing) disables it, anything else
    must convert to a topic id.
    """
    if topic_id is None:
        return None
    value = str(topic_id).strip()
    if not value or value.lower() == ALL_TOPICS:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"topicId must be '{ALL_TOPICS}' or a topic id, got: {topic_id}") from exc


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ============================================================================
# Query Building Helpers
# ============================================================================

def reply_count_column():
    """Correlated count of replies per question."""
    return (
        select(func.count(Reply.id))
        .where(Reply.question_id == Question.id)
        .correlate(Question)
        .scalar_subquery()
        .label("reply_count")
    )


def apply_search_filter(query, search: Optional[str]):
    """Case-insensitive substring match on title or body."""
    term = (search or "").strip().lower()
    if not term:
        return query
    pattern = f"%{escape_like(term)}%"
    return query.where(
        or_(
            func.lower(Question.title).like(pattern, escape="\\"),
            func.lower(Question.body).like(pattern, escape="\\"),
        )
    )


def apply_topic_filter(query, topic_id: Optional[int]):
    if topic_id is None:
        return query
    return query.where(Question.topic_id == topic_id)


def apply_sort(query, sort: QuestionSort, reply_count):
    """Order the listing; ties fall back to insertion order."""
    if sort == QuestionSort.OLDEST:
        return query.order_by(Question.created_at.asc(), Question.id.asc())
    if sort == QuestionSort.MOST_REPLIES:
        return query.order_by(reply_count.desc(), Question.id.asc())
    return query.order_by(Question.created_at.desc(), Question.id.desc())


def build_question_query(search: Optional[str], topic_id: Optional[int], sort: QuestionSort):
    """Select (Question, reply_count) rows matching the listing parameters."""
    reply_count = reply_count_column()
    query = select(Question, reply_count)
    query = apply_topic_filter(query, topic_id)
    query = apply_search_filter(query, search)
    return apply_sort(query, sort, reply_count)
