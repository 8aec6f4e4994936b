"""
Worker Schemas - Induction submission and admin views
"""
from typing import Optional
from datetime import datetime, date
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from site_compliance.schemas.common import fix_datetime_timezone
from site_compliance.schemas.certification import Certification


class SafetyAcknowledgements(BaseModel):
    """Every statement must be accepted before the induction is recorded"""
    no_alcohol_drugs: bool
    electrical_equipment: bool
    hazardous_substances: bool
    use_ppe: bool
    high_risk_work_meeting: bool
    appropriate_signage: bool
    no_unauthorized_visitors: bool
    housekeeping: bool
    employer_training: bool
    employer_swms: bool
    discussed_swms: bool
    pre_start_meeting: bool
    read_safety_booklet: bool
    understand_smp: bool

    def all_accepted(self) -> bool:
        return all(self.model_dump().values())


class WorkerInductionCreate(BaseModel):
    wk_first_name: str = Field(..., min_length=1, max_length=100)
    wk_last_name: Optional[str] = Field(None, max_length=100)
    wk_email: EmailStr
    wk_mobile: str = Field(..., min_length=6, max_length=30)
    wk_trade: Optional[str] = None
    wk_position: Optional[str] = None
    wk_emergency_name: str = Field(..., min_length=1)
    wk_emergency_phone: str = Field(..., min_length=6, max_length=30)
    wk_emergency_relationship: str = Field(..., min_length=1)
    acknowledgements: SafetyAcknowledgements
    white_card_number: Optional[str] = Field(None, max_length=50)
    white_card_expiry_date: Optional[date] = None


class WorkerInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    wk_id: str
    wk_email: str
    wk_first_name: str
    wk_last_name: Optional[str] = None
    wk_mobile: Optional[str] = None
    wk_trade: Optional[str] = None
    wk_position: Optional[str] = None
    wk_induction_completed: bool
    wk_induction_completed_at: Optional[datetime] = None
    wk_created_at: datetime
    wk_updated_at: Optional[datetime] = None

    @field_validator('wk_induction_completed_at', 'wk_created_at', 'wk_updated_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_datetime_timezone(v)


class Worker(WorkerInDB):
    pass


class WorkerDetail(Worker):
    """Worker with the authoritative (most recent) white card"""
    current_certification: Optional[Certification] = None
