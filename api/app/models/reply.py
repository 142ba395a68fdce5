"""
Reply model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from sqlalchemy import DateTime
from datetime import datetime

from app.utils.time_utils import utc_now


class Reply(SQLModel, table=True):
    """Reply table - answers attached to exactly one question."""
    __tablename__ = "reply"

    id: Optional[int] = Field(default=None, primary_key=True)
    question_id: int = Field(foreign_key="question.id", index=True)
    body: str
    author: str  # Username of the creator, never changed
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
