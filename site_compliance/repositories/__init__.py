from .worker_repository import WorkerRepository
from .job_site_repository import JobSiteRepository
from .certification_repository import CertificationRepository
from .site_attendance_repository import SiteAttendanceRepository
from .notification_dedup_repository import NotificationDedupRepository
from .notification_audit_repository import NotificationAuditRepository

__all__ = [
    "WorkerRepository",
    "JobSiteRepository",
    "CertificationRepository",
    "SiteAttendanceRepository",
    "NotificationDedupRepository",
    "NotificationAuditRepository"
]
