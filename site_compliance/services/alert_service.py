"""
Compliance Alert Service - Rate-limited, audited webhook alerts
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from site_compliance.repositories.notification_dedup_repository import NotificationDedupRepository
from site_compliance.repositories.notification_audit_repository import NotificationAuditRepository
from site_compliance.services.webhook_service import WebhookService
from site_compliance.schemas.alert import ComplianceAlertPayload, AlertDispatchResult
from site_compliance.core.config import settings
from atams.logging import get_logger

logger = get_logger(__name__)

COMPLIANCE_ALERT = "compliance_alert"
RESPONSE_BODY_LIMIT = 1000


class ComplianceAlertService:
    def __init__(self, webhook: Optional[WebhookService] = None) -> None:
        self.webhook = webhook or WebhookService()
        self.dedup_repo = NotificationDedupRepository()
        self.audit_repo = NotificationAuditRepository()
        self.cooldown = timedelta(minutes=settings.COMPLIANCE_ALERT_COOLDOWN_MINUTES)

    def _recently_alerted(self, db: Session, worker_id: str, now: datetime) -> bool:
        try:
            return self.dedup_repo.has_recent(db, worker_id, COMPLIANCE_ALERT, since=now - self.cooldown)
        except SQLAlchemyError as e:
            # Sending a duplicate beats missing an alert
            db.rollback()
            logger.error("Compliance alert dedup check failed", extra={'extra_data': {
                'worker_id': worker_id, 'error': str(e)
            }})
            return False

    def _audit(self, db: Session, payload: Dict[str, Any], result: str, now: datetime) -> Optional[str]:
        try:
            audit = self.audit_repo.record(db, COMPLIANCE_ALERT, payload, result, created_at=now)
            return audit.na_id
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to insert notification audit", extra={'extra_data': {'error': str(e)}})
            return None

    async def queue_non_compliance_alert(
        self,
        db: Session,
        payload: ComplianceAlertPayload,
        now: Optional[datetime] = None
    ) -> AlertDispatchResult:
        """
        Send a compliance alert to the automation webhook

        At most one alert per worker per cooldown window. Never raises:
        failures come back as {success: False, error}.
        """
        missing = self.webhook.missing_config_reason()
        if missing:
            logger.warning(f"{missing}, skipping compliance alert")
            return AlertDispatchResult(skipped=True, reason=missing)

        now = now or datetime.now(timezone.utc)
        body = payload.model_dump(mode="json", by_alias=True, exclude_none=True)

        try:
            if self._recently_alerted(db, payload.worker_id, now):
                logger.info("Skipping duplicate compliance alert", extra={'extra_data': {
                    'worker_id': payload.worker_id
                }})
                self._audit(db, {**body, "reason": "rate_limited"}, "success", now)
                return AlertDispatchResult(skipped=True, reason="Rate limited - alert sent within past hour")

            response = await self.webhook.post({**body, "timestamp": body["occurredAt"]})
            response_text = response.text
            success = response.is_success

            if success:
                self.dedup_repo.record(
                    db,
                    payload.worker_id,
                    COMPLIANCE_ALERT,
                    created_at=now,
                    expiry_date=now.date()
                )

            audit_id = self._audit(db, {
                **body,
                "webhook_url": self.webhook.url,
                "response_status": response.status_code,
                "response_body": response_text[:RESPONSE_BODY_LIMIT],
            }, "success" if success else "failure", now)

            if not success:
                logger.error("Compliance alert webhook failed", extra={'extra_data': {
                    'worker_id': payload.worker_id,
                    'status': response.status_code,
                    'response': response_text[:RESPONSE_BODY_LIMIT]
                }})
                return AlertDispatchResult(
                    success=False,
                    status=response.status_code,
                    error=f"Webhook failed: {response.status_code} {response.reason_phrase} - {response_text}",
                    audit_id=audit_id
                )

            logger.info("Compliance alert webhook sent", extra={'extra_data': {
                'worker_id': payload.worker_id, 'status': response.status_code
            }})
            return AlertDispatchResult(success=True, status=response.status_code, audit_id=audit_id)

        except Exception as e:
            logger.error(f"Failed to queue compliance alert: {e}", exc_info=True)
            db.rollback()
            self._audit(db, {**body, "error": str(e)}, "failure", now)
            return AlertDispatchResult(success=False, error=str(e))
