from atams.schemas import DataResponse, PaginationResponse

from .job_site import JobSite, JobSiteCreate, JobSiteUpdate
from .certification import Certification, CertificationCreate
from .worker import Worker, WorkerDetail, WorkerInductionCreate, SafetyAcknowledgements
from .attendance import SiteAttendance
from .check_in import Coordinates, CheckInRequest, CheckInResult, CsrfTokenResponse
from .alert import ComplianceAlertPayload, AlertDispatchResult, ExpiryReminderResult

__all__ = [
    # Job site schemas
    "JobSite",
    "JobSiteCreate",
    "JobSiteUpdate",
    # Worker & certification schemas
    "Certification",
    "CertificationCreate",
    "Worker",
    "WorkerDetail",
    "WorkerInductionCreate",
    "SafetyAcknowledgements",
    # Attendance & check-in schemas
    "SiteAttendance",
    "Coordinates",
    "CheckInRequest",
    "CheckInResult",
    "CsrfTokenResponse",
    # Alert schemas
    "ComplianceAlertPayload",
    "AlertDispatchResult",
    "ExpiryReminderResult",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
