"""
Alert Schemas - Compliance webhook payload and dispatch outcome
"""
from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ComplianceAlertPayload(BaseModel):
    """Wire format sent to the automation webhook (camelCase)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    worker_id: str
    worker_name: str
    worker_email: str
    site_id: Optional[str] = None
    site_name: Optional[str] = None
    reason: str
    occurred_at: datetime
    type: Literal["compliance_alert"] = "compliance_alert"


class AlertDispatchResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = False
    skipped: bool = False
    reason: Optional[str] = None
    status: Optional[int] = None
    audit_id: Optional[str] = None
    error: Optional[str] = None


class ExpiryReminderResult(BaseModel):
    count: int = 0
    skipped: bool = False
    reason: Optional[str] = None
    audit_id: Optional[str] = None
    notified_worker_ids: List[str] = Field(default_factory=list)
