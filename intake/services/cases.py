"""Case submission and lookup on top of the record stores."""

import logging

from intake.schemas.cases import CaseCreateRequest
from intake.schemas.records import SYSTEM_AUTHOR, Case, CaseUpdate
from intake.services.ids import generate_id, utc_now_iso
from intake.storage import Storage

logger = logging.getLogger(__name__)

SUBMITTED_MESSAGE = "Your case has been submitted successfully and is under review."


class CaseNotFoundError(Exception):
    """Raised when no case has the requested id."""

    def __init__(self, case_id: str) -> None:
        self.case_id = case_id
        super().__init__(f"Case {case_id!r} not found")


class CaseAccessDeniedError(Exception):
    """Raised when a user asks for a case they did not submit."""

    def __init__(self, case_id: str, user_id: str) -> None:
        self.case_id = case_id
        self.user_id = user_id
        super().__init__(f"User {user_id!r} does not own case {case_id!r}")


def _newest_first(items: list) -> list:
    # ISO-8601 UTC timestamps sort lexically in time order.
    return sorted(items, key=lambda item: item.created_at, reverse=True)


async def submit_case(storage: Storage, user_id: str, body: CaseCreateRequest) -> Case:
    """Persist a new case in 'submitted' status plus the initial system timeline entry."""
    now = utc_now_iso()
    case = await storage.cases.create(
        Case(
            id=generate_id(),
            user_id=user_id,
            status="submitted",
            company_name=body.company_name,
            domain=body.domain,
            incident_date=body.incident_date,
            description=body.description,
            loss_types=body.loss_types,
            monetary_loss=body.monetary_loss,
            evidence_files=body.evidence_files,
            contact_name=body.contact_name,
            contact_email=body.contact_email,
            contact_phone=body.contact_phone,
            created_at=now,
            updated_at=now,
        )
    )
    await storage.updates.create(
        CaseUpdate(
            id=generate_id(),
            case_id=case.id,
            message=SUBMITTED_MESSAGE,
            created_at=utc_now_iso(),
            created_by=SYSTEM_AUTHOR,
        )
    )
    logger.info("Case submitted", extra={"case_id": case.id, "user_id": user_id})
    return case


async def list_user_cases(storage: Storage, user_id: str) -> list[Case]:
    """All cases submitted by user_id, newest first."""
    cases = await storage.cases.find_many(lambda c: c.user_id == user_id)
    return _newest_first(cases)


async def get_case_with_updates(
    storage: Storage, case_id: str, user_id: str
) -> tuple[Case, list[CaseUpdate]]:
    """
    Return the case and its updates (newest first).

    Raises CaseNotFoundError for an unknown id and CaseAccessDeniedError when
    user_id is not the submitter.
    """
    case = await storage.cases.find_one(lambda c: c.id == case_id)
    if case is None:
        raise CaseNotFoundError(case_id)
    if case.user_id != user_id:
        raise CaseAccessDeniedError(case_id, user_id)
    updates = await storage.updates.find_many(lambda u: u.case_id == case_id)
    return case, _newest_first(updates)
