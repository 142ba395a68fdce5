"""
Topics endpoint.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
from app.api.deps import get_current_identity
from app.core.database import get_session
from app.schemas.auth import Identity
from app.schemas.question import OkResponse
from app.schemas.topic import (
    TopicResponse,
    CreateTopicRequest,
    UpdateTopicRequest,
)
from app.services import topic_service

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=List[TopicResponse])
async def get_topics(session: Session = Depends(get_session)):
    """Get all topics, most recent first."""
    return topic_service.list_topics(session)


@router.post("", response_model=TopicResponse, status_code=status.HTTP_201_CREATED)
async def create_topic(
    request: CreateTopicRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Create a new topic."""
    return topic_service.create_topic(session, identity, request.title, request.color)


@router.put("/{topic_id}", response_model=TopicResponse)
async def update_topic(
    topic_id: int,
    request: UpdateTopicRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Update a topic by ID."""
    return topic_service.update_topic(session, identity, topic_id, request.title, request.color)


@router.delete("/{topic_id}", response_model=OkResponse)
async def delete_topic(
    topic_id: int,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Delete a topic. Its questions move to the oldest remaining topic."""
    topic_service.delete_topic(session, identity, topic_id)
    return OkResponse()
