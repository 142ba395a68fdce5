"""
API router aggregation.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import auth, topics, questions, replies, health

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(auth.router)
api_router.include_router(topics.router)
api_router.include_router(questions.router)
api_router.include_router(replies.router)
api_router.include_router(health.router)
