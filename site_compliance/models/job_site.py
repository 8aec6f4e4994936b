"""
Job Site Model - Geofenced locations eligible for check-in
"""
import uuid

from sqlalchemy import Column, String, DateTime, Float, Integer, Boolean
from sqlalchemy.sql import func
from atams.db import Base


class JobSite(Base):
    """Job Site model for compliance schema - Table: compliance.job_sites"""
    __tablename__ = "job_sites"
    __table_args__ = {"schema": "compliance"}

    js_id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    js_name = Column(String(255), nullable=False)
    js_lat = Column(Float, nullable=False)
    js_lng = Column(Float, nullable=False)
    js_radius_m = Column(Integer, nullable=False, default=100)  # geofence radius in meters
    js_active = Column(Boolean, nullable=False, default=True, index=True)
    js_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    js_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
