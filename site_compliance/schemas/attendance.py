"""
Site Attendance Schemas
"""
from datetime import datetime, date
from pydantic import BaseModel, ConfigDict, field_validator

from site_compliance.schemas.common import fix_datetime_timezone


class SiteAttendanceInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sa_id: str
    sa_worker_id: str
    sa_job_site_id: str
    sa_checked_in_at: datetime
    sa_checked_in_on: date
    sa_lat: float
    sa_lng: float

    @field_validator('sa_checked_in_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_datetime_timezone(v)


class SiteAttendance(SiteAttendanceInDB):
    pass
