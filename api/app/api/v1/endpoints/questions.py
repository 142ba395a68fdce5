"""
Questions endpoint.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List, Optional
from app.api.deps import get_current_identity
from app.core.database import get_session
from app.schemas.auth import Identity
from app.schemas.question import (
    QuestionResponse,
    QuestionDetailResponse,
    CreateQuestionRequest,
    UpdateQuestionRequest,
    ReplyRequest,
    ReplyResponse,
    OkResponse,
)
from app.services import question_service, reply_service
from app.services.filter_service import parse_sort, parse_topic_filter

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=List[QuestionResponse])
async def get_questions(
    q: Optional[str] = None,
    topic_id: Optional[str] = Query(None, alias="topicId"),
    sort: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """
    List questions.

    - q: case-insensitive search over title and body
    - topicId: "all" or a topic id
    - sort: new (default), old or answers; newest-first, oldest-first and
      most-replies-first are accepted too
    """
    return question_service.list_questions(
        session,
        search=q,
        topic_id=parse_topic_filter(topic_id),
        sort=parse_sort(sort),
    )


@router.get("/{question_id}", response_model=QuestionDetailResponse)
async def get_question(question_id: int, session: Session = Depends(get_session)):
    """Get a question with its replies, oldest reply first."""
    return question_service.get_question_detail(session, question_id)


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    request: CreateQuestionRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Ask a question as the signed-in user."""
    return question_service.create_question(
        session, identity, request.title, request.body, request.topic_id
    )


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    request: UpdateQuestionRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Edit a question. Only its author may do so."""
    return question_service.update_question(
        session,
        identity,
        question_id,
        title=request.title,
        body=request.body,
        topic_id=request.topic_id,
    )


@router.delete("/{question_id}", response_model=OkResponse)
async def delete_question(
    question_id: int,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Delete a question and its replies. Only its author may do so."""
    question_service.delete_question(session, identity, question_id)
    return OkResponse()


@router.post("/{question_id}/replies", response_model=ReplyResponse, status_code=status.HTTP_201_CREATED)
async def add_reply(
    question_id: int,
    request: ReplyRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Reply to a question."""
    return reply_service.add_reply(session, identity, question_id, request.body)
