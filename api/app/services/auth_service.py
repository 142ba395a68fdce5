"""
Auth service for registration and login.
"""
import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.exceptions import AuthenticationError, ConflictError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.models import User
from app.schemas.auth import AuthResponse, UserResponse
from app.services.validation import validate_credentials

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def find_user_by_username(session: Session, username: str) -> Optional[User]:
    """Look a user up by username, ignoring case."""
    statement = select(User).where(func.lower(User.username) == func.lower(username.strip()))
    return session.exec(statement).first()


def issue_token(user: User) -> AuthResponse:
    """Build the {token, user} payload for a user."""
    return AuthResponse(
        token=create_access_token(user.id, user.username),
        user=UserResponse(id=user.id, username=user.username),
    )


def register_user(session: Session, username: str, password: str) -> AuthResponse:
    """
    Create an account and log it in.

    Raises:
        ValidationError: if the username or password is too short
        ConflictError: if the username is taken in any letter case
    """
    username = validate_credentials(username, password)

    if find_user_by_username(session, username):
        raise ConflictError("Username already taken")

    user = User(username=username, password_hash=get_password_hash(password))
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration
        session.rollback()
        raise ConflictError("Username already taken") from exc
    session.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return issue_token(user)


def login_user(session: Session, username: str, password: str) -> AuthResponse:
    """
    Check credentials and issue a fresh token.

    Unknown users and wrong passwords fail the same way so usernames
    cannot be enumerated.
    """
    user = find_user_by_username(session, username or "")
    if not user or not verify_password(password or "", user.password_hash):
        logger.warning(f"Rejected login for username {username!r}")
        raise AuthenticationError(INVALID_CREDENTIALS)
    return issue_token(user)
