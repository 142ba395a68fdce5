from fastapi import APIRouter
from app.schemas.question import OkResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=OkResponse)
async def health():
    return OkResponse()
