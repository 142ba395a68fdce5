"""
Question model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from sqlalchemy import DateTime
from datetime import datetime

from app.utils.time_utils import utc_now


class Question(SQLModel, table=True):
    """Question table - a post filed under a topic."""
    __tablename__ = "question"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    body: str
    topic_id: int = Field(foreign_key="topic.id", index=True)
    author: str = Field(index=True)  # Username of the creator, never changed
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
