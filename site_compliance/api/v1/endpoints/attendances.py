"""
Attendances Endpoints - Check-in history for administrators
"""
from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from site_compliance.db.session import get_db
from site_compliance.services.attendance_service import AttendanceService
from site_compliance.schemas import SiteAttendance, PaginationResponse
from site_compliance.api.deps import require_auth, require_min_role_level
from site_compliance.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
attendance_service = AttendanceService()


@router.get(
    "/",
    response_model=PaginationResponse[SiteAttendance],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_attendances(
    worker_id: Optional[str] = Query(None, description="Filter by worker ID"),
    site_id: Optional[str] = Query(None, description="Filter by job site ID"),
    date_from: Optional[date] = Query(None, description="Start date (YYYY-MM-DD, UTC)"),
    date_to: Optional[date] = Query(None, description="End date (YYYY-MM-DD, UTC)"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    sort: str = Query("desc", pattern="^(asc|desc)$", description="Sort order by check-in time"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get site check-ins (Admin only)

    **Authentication:**
    - Requires role level >= 50 (Admin or above)

    **Query Parameters:**
    - worker_id / site_id: Filter by worker or job site
    - date_from/date_to: UTC date range filter
    - sort: asc or desc (default desc)
    """
    attendances = attendance_service.list_attendances(
        db, worker_id, site_id, date_from, date_to, offset, limit, sort
    )
    total = attendance_service.count_attendances(db, worker_id, site_id, date_from, date_to)

    response = PaginationResponse(
        success=True,
        message="Attendances retrieved successfully",
        data=attendances,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)
