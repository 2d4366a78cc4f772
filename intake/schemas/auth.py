"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """New account details. Formats are checked by the route (400 on failure)."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    phone: str = Field(..., min_length=1, max_length=32, description="Phone number")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class UserPublic(BaseModel):
    """User fields safe to return to the client (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    phone: str


class AuthResponse(BaseModel):
    """JWT access token and profile returned after signup or login."""

    success: bool = True
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated user (id, email) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
