"""API routes for staff login."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from civicalert.config import get_settings
from civicalert.schemas.auth import LoginRequest, Token, User
from civicalert.services.auth import (
    InvalidCredentialsError,
    authenticate,
    create_access_token,
    decode_access_token,
)

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter(prefix="/auth", tags=["auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_v1_prefix}/auth/login")

STAFF_ROLES = frozenset({"admin", "responder"})


async def get_current_user(token: Annotated[str, Depends(oauth2_scheme)]) -> User:
    """Resolve the bearer token to a user or answer 401."""
    try:
        return decode_access_token(token)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def require_staff(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Gate triage operations to admins and responders."""
    if user.role not in STAFF_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff access required",
        )
    return user


@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest) -> Token:
    """Exchange staff credentials for a bearer token."""
    user = authenticate(credentials.username, credentials.password)
    logger.info(f"User {user.username} logged in")
    return Token(access_token=create_access_token(user), user=user)


@router.get("/me", response_model=User)
async def read_current_user(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Return the user the bearer token belongs to."""
    return user
