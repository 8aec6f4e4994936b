from .job_site_service import JobSiteService
from .worker_service import WorkerService
from .attendance_service import AttendanceService
from .csrf_service import CsrfService
from .webhook_service import WebhookService, verify_webhook_signature
from .alert_service import ComplianceAlertService
from .check_in_service import CheckInService
from .expiry_reminder_service import ExpiryReminderService

__all__ = [
    "JobSiteService",
    "WorkerService",
    "AttendanceService",
    "CsrfService",
    "WebhookService",
    "verify_webhook_signature",
    "ComplianceAlertService",
    "CheckInService",
    "ExpiryReminderService"
]
