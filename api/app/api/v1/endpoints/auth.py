from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from app.api.deps import get_current_identity
from app.core.database import get_session
from app.schemas.auth import LoginRequest, RegisterRequest, AuthResponse, UserResponse, Identity
from app.services.auth_service import register_user, login_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Register a new user and return a token for it."""
    return register_user(session, register_data.username, register_data.password)


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Login with username and password."""
    return login_user(session, login_data.username, login_data.password)


@router.get("/me", response_model=UserResponse)
async def me(identity: Identity = Depends(get_current_identity)):
    """Return the user the bearer token belongs to."""
    return UserResponse(id=identity.user_id, username=identity.username)
