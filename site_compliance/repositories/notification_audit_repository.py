"""
Notification Audit Repository - Record of every webhook attempt
"""
from typing import Any, Dict
from datetime import datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from site_compliance.models.notification import NotificationAudit


class NotificationAuditRepository(BaseRepository[NotificationAudit]):
    def __init__(self):
        super().__init__(NotificationAudit)

    def record(
        self,
        db: Session,
        kind: str,
        payload: Dict[str, Any],
        result: str,
        created_at: datetime
    ) -> NotificationAudit:
        return self.create(db, {
            "na_kind": kind,
            "na_payload": payload,
            "na_result": result,
            "na_created_at": created_at,
        })
