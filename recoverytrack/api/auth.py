"""
Authentication API endpoints.
"""

import logging
import uuid
from datetime import timedelta
from fastapi import APIRouter, HTTPException, status, Depends, Form

from ..models import UserCreate, Token, User, TokenData
from ..utils.auth import (
    authenticate_user,
    create_access_token,
    get_password_hash,
    get_current_user,
)
from ..config import settings
from ..storage.user_storage import UserStorage, get_user_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _public_user(user: dict) -> User:
    return User(**{k: v for k, v in user.items() if k != 'hashed_password'})


@router.post("/signup", response_model=User, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserCreate,
    users: UserStorage = Depends(get_user_storage)
):
    """
    Register a new player, physician or coach.

    Raises:
        HTTPException: If the email is already registered
    """
    if await users.get_user_by_email(user_data.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered"
        )

    user = await users.create_user(
        user_id=str(uuid.uuid4()),
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        role=user_data.role.value,
        full_name=user_data.full_name,
        age=user_data.age,
        team_id=user_data.team_id,
    )
    return _public_user(user)


@router.post("/login", response_model=Token)
async def login(email: str = Form(...), password: str = Form(...)):
    """
    Login and get an access token.

    Raises:
        HTTPException: If authentication fails
    """
    user = await authenticate_user(email, password)
    if not user:
        logger.warning("Failed login attempt", extra={"extra_fields": {"email": email}})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={"sub": user["id"], "role": user["role"]},
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes)
    )
    return Token(access_token=access_token, token_type="bearer")


@router.get("/me", response_model=User)
async def get_me(
    current_user: TokenData = Depends(get_current_user),
    users: UserStorage = Depends(get_user_storage)
):
    """
    Get current user information.

    Raises:
        HTTPException: If user not found
    """
    user = await users.get_user(current_user.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return _public_user(user)
