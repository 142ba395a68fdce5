"""
Password hashing, bearer tokens and ownership checks.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.schemas.auth import Identity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: int, username: str, expires_delta: Optional[timedelta] = None) -> str:
    expires_delta = expires_delta or timedelta(days=settings.access_token_expire_days)
    expire = datetime.now(tz=timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "username": username, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: Optional[str]) -> Identity:
    """
    Verify a bearer token and return the identity it carries.

    Raises:
        AuthenticationError: if the token is missing, malformed, expired,
            signed with another key or lacks the identity claims
    """
    if not token:
        raise AuthenticationError("Unauthorized")
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise AuthenticationError("Invalid token") from exc

    subject = payload.get("sub")
    username = payload.get("username")
    if subject is None or not username:
        raise AuthenticationError("Invalid token")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token") from exc
    return Identity(user_id=user_id, username=username)


def ensure_author(author: str, identity: Identity) -> None:
    """Allow only the author of a question or reply to change it."""
    if author != identity.username:
        raise AuthorizationError("Forbidden")
