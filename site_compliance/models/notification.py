"""
Notification Models - Webhook dedup window and delivery audit trail
"""
import uuid

from sqlalchemy import Column, String, DateTime, Date, JSON
from sqlalchemy.sql import func
from atams.db import Base


class NotificationDedup(Base):
    """Notification dedup model for compliance schema - Table: compliance.notification_dedup"""
    __tablename__ = "notification_dedup"
    __table_args__ = {"schema": "compliance"}

    nd_id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    nd_worker_id = Column(String(36), nullable=False, index=True)
    nd_type = Column(String(30), nullable=False)  # 'compliance_alert' or 'expiry'
    nd_expiry_date = Column(Date, nullable=True)
    nd_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class NotificationAudit(Base):
    """Notification audit model for compliance schema - Table: compliance.notification_audits"""
    __tablename__ = "notification_audits"
    __table_args__ = {"schema": "compliance"}

    na_id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    na_kind = Column(String(30), nullable=False)
    na_payload = Column(JSON, nullable=False)
    na_result = Column(String(10), nullable=False)  # 'success' or 'failure'
    na_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
