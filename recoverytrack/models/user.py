"""
User Model - Defines the user, role and profile data structures.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRole(str, Enum):
    """Who the user is on the team."""
    PLAYER = "player"
    PHYSICIAN = "physician"
    COACH = "coach"


class UserBase(BaseModel):
    """Base user model with common fields."""
    email: EmailStr
    role: UserRole
    full_name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=10, le=100)
    team_id: Optional[int] = None


class UserCreate(UserBase):
    """Signup payload."""
    password: str = Field(..., min_length=6)


class User(UserBase):
    """User model with all fields."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime


class Token(BaseModel):
    """JWT token response model."""
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Token payload data."""
    user_id: Optional[str] = None
    role: Optional[UserRole] = None
