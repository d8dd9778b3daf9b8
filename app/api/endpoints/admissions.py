from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.models.enums import AdmissionStatus
from app.schemas.auth import CallerIdentity
from app.schemas.admission import AdmissionCreate, AdmissionResponse, AdmissionStatusUpdate
from app.schemas.responses import SuccessResponse, PaginatedResponse
from app.services.admission_service import AdmissionService

router = APIRouter()


@router.post("", response_model=SuccessResponse[AdmissionResponse])
async def create_admission(
    admission_in: AdmissionCreate,
    caller: CallerIdentity = Depends(deps.require_staff),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Admission intake.
    """
    admission = await AdmissionService.create_admission(db, admission_in)
    return SuccessResponse(
        data=AdmissionResponse.model_validate(admission),
        message="Admission created"
    )


@router.get("", response_model=PaginatedResponse[AdmissionResponse])
async def list_admissions(
    status_filter: Optional[AdmissionStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    caller: CallerIdentity = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    List admissions, newest first.
    """
    admissions, total = await AdmissionService.list_admissions(
        db, status=status_filter, page=page, page_size=page_size
    )
    total_pages = (total + page_size - 1) // page_size
    return PaginatedResponse(
        data=[AdmissionResponse.model_validate(a) for a in admissions],
        meta={
            "page": page,
            "page_size": page_size,
            "total": total,
            "total_pages": total_pages
        }
    )


@router.get("/{admission_id}", response_model=SuccessResponse[AdmissionResponse])
async def get_admission(
    admission_id: UUID,
    caller: CallerIdentity = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    admission = await AdmissionService.get_admission_by_id(db, admission_id)
    if not admission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admission not found")
    return SuccessResponse(data=AdmissionResponse.model_validate(admission))


@router.patch("/{admission_id}/status", response_model=SuccessResponse[AdmissionResponse])
async def update_admission_status(
    admission_id: UUID,
    status_in: AdmissionStatusUpdate,
    caller: CallerIdentity = Depends(deps.require_staff),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Change an admission's status (records are never deleted).
    """
    admission = await AdmissionService.get_admission_by_id(db, admission_id)
    if not admission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admission not found")
    admission = await AdmissionService.update_status(db, admission, status_in.status)
    return SuccessResponse(
        data=AdmissionResponse.model_validate(admission),
        message="Admission status updated"
    )
