from .worker import Worker
from .job_site import JobSite
from .certification import Certification
from .site_attendance import SiteAttendance
from .notification import NotificationDedup, NotificationAudit

SCHEMA = "compliance"

__all__ = [
    "SCHEMA",
    "Worker",
    "JobSite",
    "Certification",
    "SiteAttendance",
    "NotificationDedup",
    "NotificationAudit"
]
