"""Persisted domain records: users, cases, case updates, admins, and channel configuration.

Records are stored with camelCase keys (``createdAt``, ``lossTypes``) both in the
JSON documents and in remote tables; Python code uses the snake_case field names.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from intake.services.normalize import to_optional_number, to_string_array

CaseStatus = Literal[
    "submitted",
    "under_review",
    "verified",
    "rejected",
    "scheduled_for_podcast",
    "published",
]

LossType = Literal["money", "time", "opportunity", "meeting", "other"]

AdminRole = Literal["admin", "super_admin"]

# CaseUpdate.created_by marker for updates generated by the application itself.
SYSTEM_AUTHOR = "system"


class Record(BaseModel):
    """Base for every stored record: a string id plus camelCase aliases on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1)


class User(Record):
    """Registered user who submits cases. Email uniqueness is checked at signup."""

    email: str
    password: str = Field(..., description="bcrypt hash, never the plain password")
    name: str
    phone: str
    created_at: str


class Case(Record):
    """A complaint about a business, tracked through the review/podcast workflow."""

    user_id: str
    status: CaseStatus = "submitted"

    company_name: str
    domain: str = Field(..., description='Industry, e.g. "E-commerce", "Banking".')
    incident_date: str
    description: str
    loss_types: list[LossType] = Field(..., min_length=1)
    monetary_loss: float | None = Field(default=None, ge=0)

    evidence_files: list[str] | None = None

    contact_name: str
    contact_email: str
    contact_phone: str

    verified_by: str | None = None
    verified_at: str | None = None
    rejection_reason: str | None = None

    podcast_video_url: str | None = None
    published_at: str | None = None

    created_at: str
    updated_at: str

    @field_validator("loss_types", mode="before")
    @classmethod
    def coerce_loss_types(cls, v: object) -> list[str]:
        return to_string_array(v)

    @field_validator("evidence_files", mode="before")
    @classmethod
    def coerce_evidence_files(cls, v: object) -> list[str] | None:
        if v is None:
            return None
        return to_string_array(v)

    @field_validator("monetary_loss", mode="before")
    @classmethod
    def coerce_monetary_loss(cls, v: object) -> float | None:
        return to_optional_number(v)


class CaseUpdate(Record):
    """Append-only progress note shown on a case timeline."""

    case_id: str
    message: str
    created_at: str
    created_by: str = Field(..., description="Admin/user id or the 'system' marker")


class Admin(Record):
    """Back-office account that verifies cases."""

    email: str
    password: str
    name: str
    role: AdminRole = "admin"
    created_at: str


class ChannelConfig(Record):
    """YouTube channel settings; only the first record in the collection is used."""

    channel_url: str
    featured_video_id: str = ""
    last_updated: str
