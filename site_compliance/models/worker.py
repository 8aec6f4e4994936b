"""
Worker Model - People who completed the site induction
"""
import uuid

from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func
from atams.db import Base


class Worker(Base):
    """Worker model for compliance schema - Table: compliance.workers"""
    __tablename__ = "workers"
    __table_args__ = {"schema": "compliance"}

    wk_id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    wk_email = Column(String(255), nullable=False, unique=True, index=True)  # stored lower-case
    wk_first_name = Column(String(100), nullable=False)
    wk_last_name = Column(String(100), nullable=True)
    wk_mobile = Column(String(30), nullable=True)
    wk_trade = Column(String(100), nullable=True)
    wk_position = Column(String(100), nullable=True)
    wk_emergency_name = Column(String(200), nullable=True)
    wk_emergency_phone = Column(String(30), nullable=True)
    wk_emergency_relationship = Column(String(100), nullable=True)
    wk_induction_completed = Column(Boolean, nullable=False, default=False)
    wk_induction_completed_at = Column(DateTime(timezone=True), nullable=True)
    wk_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    wk_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.wk_first_name or ''} {self.wk_last_name or ''}".strip()
