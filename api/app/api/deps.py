"""
Shared endpoint dependencies.
"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import decode_access_token
from app.schemas.auth import Identity

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Identity:
    """Resolve `Authorization: Bearer <token>` into the caller's identity."""
    token = credentials.credentials if credentials else None
    return decode_access_token(token)
