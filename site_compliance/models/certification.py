"""
Certification Model - Append-only white card history per worker
"""
import uuid

from sqlalchemy import Column, String, DateTime, Date, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class Certification(Base):
    """Certification model for compliance schema - Table: compliance.certifications"""
    __tablename__ = "certifications"
    __table_args__ = {"schema": "compliance"}

    ce_id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    ce_worker_id = Column(String(36), ForeignKey("compliance.workers.wk_id"), nullable=False, index=True)
    ce_type = Column(String(50), nullable=False)  # 'White Card'
    ce_status = Column(String(20), nullable=False)  # 'Valid', 'Expired', 'Awaiting Review'
    ce_number = Column(String(50), nullable=True)
    ce_expiry_date = Column(Date, nullable=True)
    ce_file_url = Column(String(500), nullable=True)
    ce_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
