"""
Job Site Schemas for request/response validation
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_compliance.schemas.common import fix_datetime_timezone


class JobSiteBase(BaseModel):
    js_name: str = Field(..., min_length=1, max_length=255)
    js_lat: float = Field(..., ge=-90, le=90)
    js_lng: float = Field(..., ge=-180, le=180)
    js_active: bool = True


class JobSiteCreate(JobSiteBase):
    js_radius_m: Optional[int] = Field(None, gt=0)  # falls back to DEFAULT_SITE_RADIUS_M


class JobSiteUpdate(BaseModel):
    js_name: Optional[str] = Field(None, min_length=1, max_length=255)
    js_lat: Optional[float] = Field(None, ge=-90, le=90)
    js_lng: Optional[float] = Field(None, ge=-180, le=180)
    js_radius_m: Optional[int] = Field(None, gt=0)
    js_active: Optional[bool] = None


class JobSiteInDB(JobSiteBase):
    model_config = ConfigDict(from_attributes=True)

    js_id: str
    js_radius_m: int
    js_created_at: datetime
    js_updated_at: Optional[datetime] = None

    @field_validator('js_updated_at', 'js_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_datetime_timezone(v)


class JobSite(JobSiteInDB):
    pass
