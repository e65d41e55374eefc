"""Registration, login and current-user endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentUser, get_current_user
from app.core.security import create_access_token, hash_password, verify_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "invalid credentials"


async def _user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Create an account and return a token for it (409 if the email is taken)."""
    if await _user_by_email(db, payload.email) is not None:
        raise HTTPException(status_code=409, detail="email already registered")
    user = User(name=payload.name, email=payload.email, password_hash=hash_password(payload.password))
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        raise HTTPException(status_code=409, detail="email already registered")
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return AuthResponse(token=create_access_token(user.id, user.email), user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Exchange email + password for a fresh token. Unknown email and wrong password look the same."""
    user = await _user_by_email(db, payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS, headers={"WWW-Authenticate": "Bearer"})
    return AuthResponse(token=create_access_token(user.id, user.email), user=UserRead.model_validate(user))


@router.get("/me", response_model=UserRead)
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """The authenticated user's record (404 if the account no longer exists)."""
    user = await db.get(User, current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    return user
