"""
Site Attendance Model - One check-in per worker per site per UTC day
"""
import uuid

from sqlalchemy import Column, String, DateTime, Date, Float, ForeignKey, UniqueConstraint
from atams.db import Base


class SiteAttendance(Base):
    """Site Attendance model for compliance schema - Table: compliance.site_attendances"""
    __tablename__ = "site_attendances"
    __table_args__ = (
        UniqueConstraint(
            "sa_worker_id", "sa_job_site_id", "sa_checked_in_on",
            name="uq_site_attendances_worker_site_day"
        ),
        {"schema": "compliance"},
    )

    sa_id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    sa_worker_id = Column(String(36), ForeignKey("compliance.workers.wk_id"), nullable=False, index=True)
    sa_job_site_id = Column(String(36), ForeignKey("compliance.job_sites.js_id"), nullable=False, index=True)
    sa_checked_in_at = Column(DateTime(timezone=True), nullable=False)
    sa_checked_in_on = Column(Date, nullable=False)  # UTC calendar day of sa_checked_in_at
    sa_lat = Column(Float, nullable=False)
    sa_lng = Column(Float, nullable=False)
