"""
Check-in Service - Compliance gate for the public site check-in form

The gate never raises. Every outcome is a CheckInResult carrying either a
success message or a field-scoped error map (form, email, location).
"""
import math
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from site_compliance.models.worker import Worker
from site_compliance.models.job_site import JobSite
from site_compliance.repositories.worker_repository import WorkerRepository
from site_compliance.repositories.job_site_repository import JobSiteRepository
from site_compliance.repositories.certification_repository import CertificationRepository
from site_compliance.repositories.site_attendance_repository import SiteAttendanceRepository
from site_compliance.services.geo import find_nearest_site
from site_compliance.services.csrf_service import CsrfService
from site_compliance.services.alert_service import ComplianceAlertService
from site_compliance.schemas.check_in import CheckInRequest, CheckInResult
from site_compliance.schemas.alert import ComplianceAlertPayload
from site_compliance.core.config import settings
from atams.logging import get_logger

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MSG_SECURITY = "Security validation failed. Please refresh the page and try again."
MSG_SPAM = "Spam detection triggered. Please try again."
MSG_EMAIL_REQUIRED = "Email is required"
MSG_EMAIL_INVALID = "Please enter a valid email address"
MSG_LOCATION_REQUIRED = "Location is required for check-in"
MSG_LOCATION_INVALID = "Invalid location coordinates. Please allow location access and try again."
MSG_WORKER_NOT_FOUND = "Worker not found. Please complete induction first or contact your supervisor."
MSG_SITES_UNAVAILABLE = "Unable to retrieve job sites. Please try again or contact support."
MSG_NO_ACTIVE_SITES = "No active job sites available. Please contact your supervisor."
MSG_WHITE_CARD_MISSING = "White card information missing. Please complete your induction or contact your supervisor."
MSG_WHITE_CARD_NOT_VALIDATED = "Your white card is not validated. Please wait for approval or contact your supervisor."
MSG_WHITE_CARD_EXPIRED = (
    "Sorry, your white card is out of date. Do not enter the site. "
    "Please fill out a new form to upload your new white card."
)
MSG_OUT_OF_RANGE = "You are not within range of any active job site. Please move closer to a job site and try again."
MSG_INSERT_FAILED = "Failed to record check-in. Please try again or contact support."
MSG_UNEXPECTED = "An unexpected error occurred. Please try again or contact support."

EXPIRED_ALERT_REASON = "Expired white card"


def duplicate_message(site_name: str) -> str:
    return f"You have already checked in to {site_name} today."


def success_message(site_name: str, days_until_expiry: Optional[int] = None) -> str:
    message = f"Successfully checked in to {site_name}! Stay safe on site."
    if days_until_expiry is not None:
        message += f" Note: Your white card expires in {days_until_expiry} days."
    return message


def worker_display_name(worker: Worker) -> str:
    return f"{worker.wk_first_name or ''} {worker.wk_last_name or ''}".strip() or "Unknown"


def expiry_instant(expiry_date: Optional[date]) -> Optional[datetime]:
    """White card expiry dates are read as midnight UTC"""
    if expiry_date is None:
        return None
    return datetime.combine(expiry_date, time.min, tzinfo=timezone.utc)


class CheckInService:
    def __init__(
        self,
        alert_service: Optional[ComplianceAlertService] = None,
        csrf_service: Optional[CsrfService] = None
    ) -> None:
        self.worker_repo = WorkerRepository()
        self.site_repo = JobSiteRepository()
        self.cert_repo = CertificationRepository()
        self.attendance_repo = SiteAttendanceRepository()
        self.alert_service = alert_service or ComplianceAlertService()
        self.csrf_service = csrf_service or CsrfService()
        self.warning_window = timedelta(days=settings.EXPIRY_WARNING_DAYS)

    async def check_in(
        self,
        db: Session,
        request: CheckInRequest,
        csrf_cookie: Optional[str],
        now: Optional[datetime] = None
    ) -> CheckInResult:
        """
        Process a public check-in submission

        Args:
            db: Database session
            request: Form data (email, coords, csrfToken, website)
            csrf_cookie: Value of the csrf_token cookie
            now: Evaluation instant (UTC); defaults to the current time

        Returns:
            CheckInResult: success + message, or errors keyed by field
        """
        try:
            return await self._check_in(db, request, csrf_cookie, now or datetime.now(timezone.utc))
        except Exception:
            logger.error("Unexpected check-in failure", exc_info=True)
            return CheckInResult.fail(form=MSG_UNEXPECTED)

    async def _check_in(
        self,
        db: Session,
        request: CheckInRequest,
        csrf_cookie: Optional[str],
        now: datetime
    ) -> CheckInResult:
        # 1. Request integrity, before touching the database
        if not self.csrf_service.is_valid(csrf_cookie, request.csrf_token):
            logger.info("Check-in rejected: CSRF validation failed")
            return CheckInResult.fail(form=MSG_SECURITY)

        if (request.website or "").strip():
            logger.info("Check-in rejected: honeypot populated")
            return CheckInResult.fail(form=MSG_SPAM)

        # 2. Input validation, errors accumulate
        errors = {}
        email = (request.email or "").strip().lower()
        if not email:
            errors["email"] = MSG_EMAIL_REQUIRED
        elif not EMAIL_PATTERN.match(email):
            errors["email"] = MSG_EMAIL_INVALID

        if request.coords is None:
            errors["location"] = MSG_LOCATION_REQUIRED
        elif not request.coords.is_valid():
            errors["location"] = MSG_LOCATION_INVALID

        if errors:
            return CheckInResult.fail(**errors)

        lat, lng = request.coords.lat, request.coords.lng

        # 3. Worker
        try:
            worker = self.worker_repo.get_by_email(db, email)
        except SQLAlchemyError:
            db.rollback()
            logger.error("Worker lookup failed", exc_info=True)
            worker = None

        if not worker:
            logger.info("Check-in rejected: worker not found", extra={'extra_data': {'email': email}})
            return CheckInResult.fail(email=MSG_WORKER_NOT_FOUND)

        log_context = {'worker_id': worker.wk_id}

        # 4. Active sites
        try:
            sites = self.site_repo.get_active_sites(db)
        except SQLAlchemyError:
            db.rollback()
            logger.error("Error fetching job sites", exc_info=True)
            return CheckInResult.fail(form=MSG_SITES_UNAVAILABLE)

        if not sites:
            logger.info("Check-in rejected: no active job sites", extra={'extra_data': log_context})
            return CheckInResult.fail(location=MSG_NO_ACTIVE_SITES)

        # 5. Nearest site, kept for alert context even when range fails later
        nearest_site = find_nearest_site(lat, lng, sites)

        # 6. Current white card
        try:
            certification = self.cert_repo.get_current(db, worker.wk_id, settings.WHITE_CARD_TYPE)
        except SQLAlchemyError:
            db.rollback()
            logger.error("Certification lookup failed", exc_info=True)
            certification = None

        if not certification:
            logger.info("Check-in rejected: white card missing", extra={'extra_data': log_context})
            return CheckInResult.fail(form=MSG_WHITE_CARD_MISSING)

        if certification.ce_status != "Valid":
            logger.info("Check-in rejected: white card not validated", extra={'extra_data': {
                **log_context, 'status': certification.ce_status
            }})
            return CheckInResult.fail(form=MSG_WHITE_CARD_NOT_VALIDATED)

        # 7. Expiry
        expires_at = expiry_instant(certification.ce_expiry_date)
        is_expired = expires_at is None or expires_at <= now
        is_expiring_soon = not is_expired and expires_at <= now + self.warning_window

        if is_expired:
            logger.info("Check-in rejected: white card expired", extra={'extra_data': {
                **log_context,
                'expiry_date': str(certification.ce_expiry_date),
                'site_id': nearest_site.js_id if nearest_site else None
            }})
            await self._dispatch_alert(db, worker, nearest_site, now)
            return CheckInResult.fail(form=MSG_WHITE_CARD_EXPIRED)

        # 8. Range
        if nearest_site is None:
            logger.info("Check-in rejected: out of range", extra={'extra_data': {
                **log_context, 'lat': lat, 'lng': lng
            }})
            return CheckInResult.fail(location=MSG_OUT_OF_RANGE)

        # 9. Duplicate for the UTC day
        today = now.astimezone(timezone.utc).date()
        try:
            already_checked_in = self.attendance_repo.exists_for_day(db, worker.wk_id, nearest_site.js_id, today)
        except SQLAlchemyError:
            # The unique constraint still rejects a duplicate insert below
            db.rollback()
            logger.error("Duplicate check-in lookup failed", exc_info=True)
            already_checked_in = False

        if already_checked_in:
            logger.info("Check-in rejected: already checked in today", extra={'extra_data': {
                **log_context, 'site_id': nearest_site.js_id
            }})
            return CheckInResult.fail(form=duplicate_message(nearest_site.js_name))

        # 10. Commit
        try:
            attendance = self.attendance_repo.record_attendance(db, {
                "sa_worker_id": worker.wk_id,
                "sa_job_site_id": nearest_site.js_id,
                "sa_checked_in_at": now,
                "sa_checked_in_on": today,
                "sa_lat": lat,
                "sa_lng": lng,
            })
        except SQLAlchemyError:
            db.rollback()
            logger.error("Error inserting attendance", exc_info=True)
            return CheckInResult.fail(form=MSG_INSERT_FAILED)

        if attendance is None:
            logger.info("Check-in rejected: concurrent duplicate", extra={'extra_data': {
                **log_context, 'site_id': nearest_site.js_id
            }})
            return CheckInResult.fail(form=duplicate_message(nearest_site.js_name))

        # 11. Success, with a warning when the card is close to expiry
        days_until_expiry = None
        if is_expiring_soon:
            days_until_expiry = math.ceil((expires_at - now).total_seconds() / 86400)

        logger.info("Worker checked in", extra={'extra_data': {
            **log_context, 'site_id': nearest_site.js_id, 'attendance_id': attendance.sa_id
        }})
        return CheckInResult.ok(success_message(nearest_site.js_name, days_until_expiry))

    async def _dispatch_alert(
        self,
        db: Session,
        worker: Worker,
        site: Optional[JobSite],
        now: datetime
    ) -> None:
        """Best effort: the denial is already decided, so failures are only logged"""
        payload = ComplianceAlertPayload(
            worker_id=worker.wk_id,
            worker_name=worker_display_name(worker),
            worker_email=worker.wk_email,
            site_id=site.js_id if site else None,
            site_name=site.js_name if site else None,
            reason=EXPIRED_ALERT_REASON,
            occurred_at=now
        )

        try:
            result = await self.alert_service.queue_non_compliance_alert(db, payload, now=now)
        except Exception:
            logger.error("Failed to queue compliance alert", exc_info=True)
            return

        if result.success:
            logger.info("Compliance alert sent", extra={'extra_data': {'worker_id': worker.wk_id}})
        elif result.skipped:
            logger.info(f"Compliance alert skipped: {result.reason}", extra={'extra_data': {'worker_id': worker.wk_id}})
        else:
            logger.error(f"Compliance alert failed: {result.error}", extra={'extra_data': {'worker_id': worker.wk_id}})
