"""
Authentication schemas.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Union


class LoginRequest(BaseModel):
    """Login request schema."""
    username: str = Field(..., description="Username (case-insensitive)")
    password: str = Field(..., description="Password")


class RegisterRequest(BaseModel):
    """Registration request schema."""
    username: str = Field(..., description="Username (minimum 3 characters)")
    password: str = Field(..., description="Password (minimum 6 characters)")


class UserResponse(BaseModel):
    """Public user info (without password hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: Union[int, str]
    username: str


class AuthResponse(BaseModel):
    """Token plus the user it identifies."""
    token: str
    user: UserResponse


class Identity(BaseModel):
    """The authenticated caller, passed explicitly into mutating operations."""
    model_config = ConfigDict(frozen=True)

    user_id: Union[int, str]
    username: str
