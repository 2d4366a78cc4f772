"""Request/response schemas for case endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from intake.schemas.records import Case, CaseUpdate, LossType
from intake.services.normalize import to_optional_number


class CaseCreateRequest(BaseModel):
    """Case submission form. Accepts camelCase (as sent by the web client) or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field(..., min_length=1, max_length=255)
    incident_date: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    loss_types: list[LossType] = Field(..., min_length=1)
    monetary_loss: float | None = Field(default=None, ge=0)
    evidence_files: list[str] | None = None
    contact_name: str = Field(..., min_length=1, max_length=255)
    contact_email: str = Field(..., min_length=1, max_length=255)
    contact_phone: str = Field(..., min_length=1, max_length=32)

    @field_validator("monetary_loss", mode="before")
    @classmethod
    def coerce_monetary_loss(cls, v: object) -> float | None:
        # Form inputs post amounts as strings; 0 and "" both mean "not given".
        return to_optional_number(v) or None


class CaseCreatedResponse(BaseModel):
    """Response for POST /cases."""

    success: bool = True
    case: Case


class CaseListResponse(BaseModel):
    """The caller's cases, newest first."""

    cases: list[Case]


class CaseDetailResponse(BaseModel):
    """One case with its timeline of updates, newest first."""

    case: Case
    updates: list[CaseUpdate]
