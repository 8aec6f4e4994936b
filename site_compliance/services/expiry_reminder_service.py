"""
Expiry Reminder Service - Periodic white card expiry summary for the builder
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from site_compliance.repositories.certification_repository import CertificationRepository
from site_compliance.repositories.notification_dedup_repository import NotificationDedupRepository
from site_compliance.repositories.notification_audit_repository import NotificationAuditRepository
from site_compliance.services.webhook_service import WebhookService, EXPIRY_USER_AGENT
from site_compliance.schemas.alert import ExpiryReminderResult
from site_compliance.core.config import settings
from atams.logging import get_logger
from atams.exceptions import ServiceUnavailableException

logger = get_logger(__name__)

AUDIT_KIND = "expiry_reminders"
DEDUP_TYPE = "expiry"


class ExpiryReminderService:
    def __init__(self, webhook: Optional[WebhookService] = None) -> None:
        self.webhook = webhook or WebhookService(user_agent=EXPIRY_USER_AGENT)
        self.cert_repo = CertificationRepository()
        self.dedup_repo = NotificationDedupRepository()
        self.audit_repo = NotificationAuditRepository()
        self.window = timedelta(days=settings.EXPIRY_REMINDER_WINDOW_DAYS)
        self.cooldown = timedelta(days=settings.EXPIRY_REMINDER_COOLDOWN_DAYS)

    def _already_notified(self, db: Session, worker_id: str, expiry_date, since: datetime) -> bool:
        try:
            return self.dedup_repo.has_recent(db, worker_id, DEDUP_TYPE, since=since, expiry_date=expiry_date)
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning("Expiry dedup check failed", extra={'extra_data': {
                'worker_id': worker_id, 'error': str(e)
            }})
            return False

    async def send_expiry_reminders(self, db: Session, now: Optional[datetime] = None) -> ExpiryReminderResult:
        """
        Run one expiry reminder sweep

        Raises:
            ServiceUnavailableException: If the automation webhook rejects the summary
        """
        missing = self.webhook.missing_config_reason()
        if missing:
            logger.warning(f"{missing}, skipping expiry reminders")
            return ExpiryReminderResult(skipped=True, reason=missing)

        now = now or datetime.now(timezone.utc)
        today = now.date()
        until = (now + self.window).date()
        date_range = {"from": today.isoformat(), "to": until.isoformat()}

        expiring = self.cert_repo.get_current_valid_expiring_between(db, settings.WHITE_CARD_TYPE, today, until)

        if not expiring:
            logger.info("No expiring certifications found", extra={'extra_data': date_range})
            audit = self.audit_repo.record(db, AUDIT_KIND, {"count": 0, "date_range": date_range}, "success", now)
            return ExpiryReminderResult(reason="No expiring certifications found", audit_id=audit.na_id)

        since = now - self.cooldown
        pending = [
            (worker, cert) for worker, cert in expiring
            if not self._already_notified(db, worker.wk_id, cert.ce_expiry_date, since)
        ]

        if not pending:
            logger.info("All expiring certifications were notified recently")
            audit = self.audit_repo.record(db, AUDIT_KIND, {
                "total_found": len(expiring),
                "filtered_count": 0,
                "reason": "all_filtered_duplicates",
                "date_range": date_range,
            }, "success", now)
            return ExpiryReminderResult(
                reason="All notifications filtered due to recent duplicates",
                audit_id=audit.na_id
            )

        expiries: List[Dict[str, Any]] = [
            {
                "name": worker.full_name or worker.wk_email,
                "email": worker.wk_email,
                "expiry_date": cert.ce_expiry_date.isoformat(),
            }
            for worker, cert in pending
        ]
        summary = {
            "type": "builder_summary",
            "generated_at": now.isoformat(),
            "expiries": expiries,
        }

        try:
            response = await self.webhook.post(summary)
            error = None if response.is_success else (
                f"Automation webhook failed: {response.status_code} {response.reason_phrase} - {response.text}"
            )
        except Exception as e:
            error = str(e)

        if error:
            logger.error(f"Expiry reminders failed: {error}")
            self.audit_repo.record(db, AUDIT_KIND, {"error": error, "count": len(pending)}, "failure", now)
            raise ServiceUnavailableException("Expiry reminders could not be delivered", details={"error": error})

        for worker, cert in pending:
            try:
                self.dedup_repo.record(db, worker.wk_id, DEDUP_TYPE, created_at=now, expiry_date=cert.ce_expiry_date)
            except SQLAlchemyError as e:
                db.rollback()
                logger.warning("Failed to insert dedup record", extra={'extra_data': {
                    'worker_id': worker.wk_id, 'error': str(e)
                }})

        audit = self.audit_repo.record(db, AUDIT_KIND, {
            "count": len(pending),
            "webhook_url": self.webhook.url,
            "date_range": date_range,
            "workers": [
                {"worker_id": worker.wk_id, "expiry_date": cert.ce_expiry_date.isoformat()}
                for worker, cert in pending
            ],
        }, "success", now)

        logger.info(f"Sent {len(pending)} expiry reminder notifications")
        return ExpiryReminderResult(
            count=len(pending),
            audit_id=audit.na_id,
            notified_worker_ids=[worker.wk_id for worker, _ in pending]
        )
