"""
Question and reply schemas.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from app.schemas.topic import UtcDatetime


class ReplyResponse(BaseModel):
    """Reply response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    body: str
    author: str
    created_at: UtcDatetime


class QuestionResponse(BaseModel):
    """Question as returned by create/update and the listing."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    topic_id: int
    author: str
    created_at: UtcDatetime
    reply_count: int = 0


class QuestionDetailResponse(QuestionResponse):
    """Question with its replies, oldest first."""
    replies: List[ReplyResponse] = []


class CreateQuestionRequest(BaseModel):
    """Request schema for asking a question."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    body: str
    topic_id: int = Field(..., alias="topicId")


class UpdateQuestionRequest(BaseModel):
    """Request schema for editing a question. Omitted fields keep their value."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    body: Optional[str] = None
    topic_id: Optional[int] = Field(None, alias="topicId")


class ReplyRequest(BaseModel):
    """Request schema for posting or editing a reply."""
    body: str


class OkResponse(BaseModel):
    """Acknowledgement for deletes and the health check."""
    ok: bool = True
