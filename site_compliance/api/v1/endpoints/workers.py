"""
Workers Endpoints - Admin views and white card review
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from site_compliance.db.session import get_db
from site_compliance.services.worker_service import WorkerService
from site_compliance.schemas import (
    Worker,
    WorkerDetail,
    Certification,
    CertificationCreate,
    DataResponse,
    PaginationResponse
)
from site_compliance.api.deps import require_auth, require_min_role_level
from site_compliance.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
worker_service = WorkerService()


@router.get(
    "/",
    response_model=PaginationResponse[Worker],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_workers(
    search: str = Query("", description="Search by name or email"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get list of inducted workers

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    workers = worker_service.list_workers(db, search=search, skip=skip, limit=limit)
    total = worker_service.count_workers(db, search=search)

    response = PaginationResponse(
        success=True,
        message="Workers retrieved successfully",
        data=workers,
        total=total,
        page=skip // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/{wk_id}",
    response_model=DataResponse[WorkerDetail],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_worker(
    wk_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get worker with current white card

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    worker = worker_service.get_worker(db, wk_id)

    response = DataResponse(
        success=True,
        message="Worker retrieved successfully",
        data=worker
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/{wk_id}/certifications",
    response_model=DataResponse[Certification],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def update_certification(
    wk_id: str,
    payload: CertificationCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Record a white card review result

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Validation:**
    - ce_status: Valid, Expired or Awaiting Review
    - ce_expiry_date: required and not in the past when ce_status is Valid

    A new history row is appended; earlier rows are kept.
    """
    certification = worker_service.update_certification(db, wk_id, payload)

    return DataResponse(
        success=True,
        message="Certification updated successfully",
        data=certification
    )
