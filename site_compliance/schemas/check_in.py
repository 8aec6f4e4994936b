"""
Check-in Schemas - Public form submission and discriminated result

The request schema is deliberately lenient: anything the form can post must
reach the check-in gate so that integrity checks run before field validation.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class Coordinates(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Optional[float]:
        return _as_float(value)

    def is_valid(self) -> bool:
        if self.lat is None or self.lng is None:
            return False
        return -90 <= self.lat <= 90 and -180 <= self.lng <= 180


class CheckInRequest(BaseModel):
    """Request schema for the public check-in form"""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = ""
    coords: Optional[Coordinates] = None
    csrf_token: Optional[str] = Field("", alias="csrfToken")
    website: Optional[str] = ""  # honeypot, always empty from real browsers

    @field_validator("email", "csrf_token", "website", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("coords", mode="before")
    @classmethod
    def coerce_coords(cls, value: Any) -> Any:
        # A non-object still has to be reported as a bad location by the gate
        if value is None or isinstance(value, (dict, Coordinates)):
            return value
        return {}


class CheckInResult(BaseModel):
    """
    Either {success: true, message} or {errors: {field: message}}

    Error fields are one of: form, email, location
    """
    success: Optional[bool] = None
    message: Optional[str] = None
    errors: Optional[Dict[str, str]] = None

    @classmethod
    def ok(cls, message: str) -> "CheckInResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, **errors: str) -> "CheckInResult":
        return cls(errors=errors)


class CsrfTokenResponse(BaseModel):
    token: str
