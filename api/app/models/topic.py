"""
Topic model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from sqlalchemy import DateTime
from datetime import datetime

from app.utils.time_utils import utc_now


class Topic(SQLModel, table=True):
    """Topic table - colored tags for grouping questions. No owner is recorded."""
    __tablename__ = "topic"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    color: str  # CSS color used as the display tag
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
