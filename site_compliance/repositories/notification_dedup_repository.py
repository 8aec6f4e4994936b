"""
Notification Dedup Repository - Cooldown windows for outbound webhooks
"""
from typing import Optional
from datetime import date, datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from site_compliance.models.notification import NotificationDedup


class NotificationDedupRepository(BaseRepository[NotificationDedup]):
    def __init__(self):
        super().__init__(NotificationDedup)

    def has_recent(
        self,
        db: Session,
        worker_id: str,
        notification_type: str,
        since: datetime,
        expiry_date: Optional[date] = None
    ) -> bool:
        """Check for a dedup row of this type for the worker created at or after `since`"""
        query = db.query(NotificationDedup.nd_id).filter(
            NotificationDedup.nd_worker_id == worker_id,
            NotificationDedup.nd_type == notification_type,
            NotificationDedup.nd_created_at >= since
        )
        if expiry_date is not None:
            query = query.filter(NotificationDedup.nd_expiry_date == expiry_date)
        return query.first() is not None

    def record(
        self,
        db: Session,
        worker_id: str,
        notification_type: str,
        created_at: datetime,
        expiry_date: Optional[date] = None
    ) -> NotificationDedup:
        return self.create(db, {
            "nd_worker_id": worker_id,
            "nd_type": notification_type,
            "nd_expiry_date": expiry_date,
            "nd_created_at": created_at,
        })
