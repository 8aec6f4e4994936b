"""
Site Attendance Repository - Data access layer for check-in records
"""
from typing import Optional, List
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from atams.db import BaseRepository
from site_compliance.models.site_attendance import SiteAttendance


class SiteAttendanceRepository(BaseRepository[SiteAttendance]):
    def __init__(self):
        super().__init__(SiteAttendance)

    def exists_for_day(self, db: Session, worker_id: str, site_id: str, day: date) -> bool:
        """Check whether the worker already checked in to the site on the given UTC day"""
        return db.query(SiteAttendance.sa_id).filter(
            SiteAttendance.sa_worker_id == worker_id,
            SiteAttendance.sa_job_site_id == site_id,
            SiteAttendance.sa_checked_in_on == day
        ).first() is not None

    def record_attendance(self, db: Session, attendance_data: dict) -> Optional[SiteAttendance]:
        """
        Insert a check-in record.
        Returns None if the (worker, site, day) unique constraint rejects it,
        i.e. a concurrent request already checked the worker in today.
        """
        try:
            attendance = SiteAttendance(**attendance_data)
            db.add(attendance)
            db.commit()
            db.refresh(attendance)
            return attendance
        except IntegrityError:
            db.rollback()
            return None

    def _filtered_query(
        self,
        db: Session,
        worker_id: str = None,
        site_id: str = None,
        date_from: date = None,
        date_to: date = None
    ):
        query = db.query(SiteAttendance)

        if worker_id:
            query = query.filter(SiteAttendance.sa_worker_id == worker_id)
        if site_id:
            query = query.filter(SiteAttendance.sa_job_site_id == site_id)
        if date_from:
            query = query.filter(SiteAttendance.sa_checked_in_on >= date_from)
        if date_to:
            query = query.filter(SiteAttendance.sa_checked_in_on <= date_to)

        return query

    def get_attendances_with_filters(
        self,
        db: Session,
        worker_id: str = None,
        site_id: str = None,
        date_from: date = None,
        date_to: date = None,
        skip: int = 0,
        limit: int = 100,
        sort: str = "desc"
    ) -> List[SiteAttendance]:
        """Get attendances with various filters using ORM"""
        query = self._filtered_query(db, worker_id, site_id, date_from, date_to)

        if sort.lower() == "asc":
            query = query.order_by(SiteAttendance.sa_checked_in_at.asc())
        else:
            query = query.order_by(SiteAttendance.sa_checked_in_at.desc())

        return query.offset(skip).limit(limit).all()

    def count_attendances_with_filters(
        self,
        db: Session,
        worker_id: str = None,
        site_id: str = None,
        date_from: date = None,
        date_to: date = None
    ) -> int:
        return self._filtered_query(db, worker_id, site_id, date_from, date_to).count()
