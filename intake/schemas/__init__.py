"""Pydantic record models and request/response schemas."""

from intake.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    SignupRequest,
    UserPublic,
)
from intake.schemas.cases import (
    CaseCreatedResponse,
    CaseCreateRequest,
    CaseDetailResponse,
    CaseListResponse,
)
from intake.schemas.channel import ChannelConfigResponse
from intake.schemas.health import HealthResponse
from intake.schemas.records import (
    SYSTEM_AUTHOR,
    Admin,
    AdminRole,
    Case,
    CaseStatus,
    CaseUpdate,
    ChannelConfig,
    LossType,
    Record,
    User,
)

__all__ = [
    "SYSTEM_AUTHOR",
    "Admin",
    "AdminRole",
    "AuthResponse",
    "Case",
    "CaseCreateRequest",
    "CaseCreatedResponse",
    "CaseDetailResponse",
    "CaseListResponse",
    "CaseStatus",
    "CaseUpdate",
    "ChannelConfig",
    "ChannelConfigResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LossType",
    "Record",
    "SignupRequest",
    "User",
    "UserPublic",
]
