"""Signup, login, and the bearer-token auth dependency (get_current_user)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from intake.core.dependencies import get_storage
from intake.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from intake.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    SignupRequest,
    UserPublic,
)
from intake.schemas.records import User
from intake.services.ids import generate_id, utc_now_iso
from intake.services.validation import is_valid_email, is_valid_phone
from intake.storage import Storage

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    storage: Annotated[Storage, Depends(get_storage)],
) -> AuthResponse:
    """
    Register a new user and return a JWT access token.
    Rejects malformed email/phone, short passwords, and already-registered emails.
    """
    if not is_valid_email(body.email):
        raise _bad_request("Invalid email format")
    if not is_valid_phone(body.phone):
        raise _bad_request("Invalid phone number")
    if not (PASSWORD_MIN_LEN <= len(body.password) <= PASSWORD_MAX_LEN):
        raise _bad_request(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters"
        )

    existing = await storage.users.find_one(lambda u: u.email == body.email)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    user = await storage.users.create(
        User(
            id=generate_id(),
            email=body.email,
            password=hash_password(body.password),
            name=body.name,
            phone=body.phone,
            created_at=utc_now_iso(),
        )
    )
    logger.info("Signup success", extra={"user_id": user.id, "email": user.email})
    return AuthResponse(
        token=create_access_token(user.id, user.email),
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    storage: Annotated[Storage, Depends(get_storage)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = await storage.users.find_one(lambda u: u.email == body.email)
    if user is None or not verify_password(body.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    logger.info("Login success", extra={"user_id": user.id, "email": user.email})
    return AuthResponse(
        token=create_access_token(user.id, user.email),
        user=UserPublic.model_validate(user),
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise _unauthorized("Invalid token payload")
    user = await storage.users.find_one(lambda u: u.id == user_id)
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser(id=user.id, email=user.email)
