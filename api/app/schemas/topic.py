"""
Topic schemas.
"""
from pydantic import AfterValidator, BaseModel, ConfigDict
from typing import Annotated, Optional
from datetime import datetime

from app.utils.time_utils import ensure_utc

# Timestamps always leave the API with their UTC offset
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class TopicResponse(BaseModel):
    """Topic response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    color: str
    created_at: UtcDatetime


class CreateTopicRequest(BaseModel):
    """Request schema for creating a topic."""
    title: str
    color: Optional[str] = None


class UpdateTopicRequest(BaseModel):
    """Request schema for updating a topic. Omitted fields keep their value."""
    title: Optional[str] = None
    color: Optional[str] = None
