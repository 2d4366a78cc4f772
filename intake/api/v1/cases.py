"""Case endpoints: submit a case, list own cases, view one case with its timeline."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from intake.api.v1.auth import get_current_user
from intake.core.dependencies import get_storage
from intake.schemas.auth import CurrentUser
from intake.schemas.cases import (
    CaseCreatedResponse,
    CaseCreateRequest,
    CaseDetailResponse,
    CaseListResponse,
)
from intake.services.cases import (
    CaseAccessDeniedError,
    CaseNotFoundError,
    get_case_with_updates,
    list_user_cases,
    submit_case,
)
from intake.storage import Storage

router = APIRouter()


@router.post("", response_model=CaseCreatedResponse, status_code=status.HTTP_201_CREATED)
async def post_case(
    body: CaseCreateRequest,
    storage: Annotated[Storage, Depends(get_storage)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CaseCreatedResponse:
    """Submit a new case. It starts in 'submitted' status with one system update."""
    case = await submit_case(storage, user.id, body)
    return CaseCreatedResponse(case=case)


@router.get("", response_model=CaseListResponse)
async def get_cases(
    storage: Annotated[Storage, Depends(get_storage)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CaseListResponse:
    """List the caller's cases, newest first."""
    return CaseListResponse(cases=await list_user_cases(storage, user.id))


@router.get("/{case_id}", response_model=CaseDetailResponse)
async def get_case(
    case_id: str,
    storage: Annotated[Storage, Depends(get_storage)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CaseDetailResponse:
    """Return one of the caller's cases with its updates, newest first."""
    try:
        case, updates = await get_case_with_updates(storage, case_id, user.id)
    except CaseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found") from e
    except CaseAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden") from e
    return CaseDetailResponse(case=case, updates=updates)
