"""
User model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from sqlalchemy import DateTime
from datetime import datetime

from app.utils.time_utils import utc_now


class User(SQLModel, table=True):
    """User table - stores forum accounts."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)  # Compared case-insensitively
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
