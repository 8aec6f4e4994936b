"""
Attendance Service - Read access to check-in history
"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from site_compliance.repositories.site_attendance_repository import SiteAttendanceRepository
from site_compliance.schemas.attendance import SiteAttendance
from atams.exceptions import BadRequestException


class AttendanceService:
    def __init__(self) -> None:
        self.repo = SiteAttendanceRepository()

    def _validate_range(self, date_from: Optional[date], date_to: Optional[date]) -> None:
        if date_from and date_to and date_from > date_to:
            raise BadRequestException("date_from must be on or before date_to")

    def list_attendances(
        self,
        db: Session,
        worker_id: Optional[str] = None,
        site_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        skip: int = 0,
        limit: int = 100,
        sort: str = "desc"
    ) -> List[SiteAttendance]:
        self._validate_range(date_from, date_to)
        rows = self.repo.get_attendances_with_filters(
            db,
            worker_id=worker_id,
            site_id=site_id,
            date_from=date_from,
            date_to=date_to,
            skip=skip,
            limit=limit,
            sort=sort
        )
        return [SiteAttendance.model_validate(r) for r in rows]

    def count_attendances(
        self,
        db: Session,
        worker_id: Optional[str] = None,
        site_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ) -> int:
        return self.repo.count_attendances_with_filters(
            db,
            worker_id=worker_id,
            site_id=site_id,
            date_from=date_from,
            date_to=date_to
        )
