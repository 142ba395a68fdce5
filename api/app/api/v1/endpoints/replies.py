"""
Replies endpoint.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.api.deps import get_current_identity
from app.core.database import get_session
from app.schemas.auth import Identity
from app.schemas.question import ReplyRequest, ReplyResponse, OkResponse
from app.services import reply_service

router = APIRouter(prefix="/replies", tags=["replies"])


@router.put("/{reply_id}", response_model=ReplyResponse)
async def update_reply(
    reply_id: int,
    request: ReplyRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Edit a reply. Only its author may do so."""
    return reply_service.update_reply(session, identity, reply_id, request.body)


@router.delete("/{reply_id}", response_model=OkResponse)
async def delete_reply(
    reply_id: int,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Delete a reply. Only its author may do so."""
    reply_service.delete_reply(session, identity, reply_id)
    return OkResponse()
