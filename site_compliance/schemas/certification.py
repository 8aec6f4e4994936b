"""
Certification Schemas - White card history
"""
from typing import Optional, Literal
from datetime import datetime, date
from pydantic import BaseModel, ConfigDict, field_validator

from site_compliance.schemas.common import fix_datetime_timezone

CertificationStatus = Literal["Valid", "Expired", "Awaiting Review"]


class CertificationCreate(BaseModel):
    """Admin review result, appended as a new history row"""
    ce_status: CertificationStatus
    ce_expiry_date: Optional[date] = None
    ce_number: Optional[str] = None


class CertificationInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ce_id: str
    ce_worker_id: str
    ce_type: str
    ce_status: str
    ce_number: Optional[str] = None
    ce_expiry_date: Optional[date] = None
    ce_file_url: Optional[str] = None
    ce_created_at: datetime

    @field_validator('ce_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_datetime_timezone(v)


class Certification(CertificationInDB):
    pass
