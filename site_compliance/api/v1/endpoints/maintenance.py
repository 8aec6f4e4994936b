"""
Maintenance Endpoints - Scheduled notification jobs
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from site_compliance.db.session import get_db
from site_compliance.services.expiry_reminder_service import ExpiryReminderService
from site_compliance.schemas import DataResponse, ExpiryReminderResult
from site_compliance.api.deps import require_min_role_level

router = APIRouter()
expiry_reminder_service = ExpiryReminderService()


@router.post(
    "/expiry-reminders",
    response_model=DataResponse[ExpiryReminderResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def send_expiry_reminders(
    db: Session = Depends(get_db)
):
    """
    Send the white card expiry summary to the automation webhook

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Use case:**
    - Should be run daily via a scheduled job
    - Workers already notified for the same expiry date within the cooldown are skipped
    """
    result = await expiry_reminder_service.send_expiry_reminders(db)

    if result.skipped:
        message = f"Expiry reminders skipped: {result.reason}"
    elif result.count == 0:
        message = result.reason or "No expiry notifications sent"
    else:
        message = f"Sent {result.count} expiry notifications"

    return DataResponse(
        success=True,
        message=message,
        data=result
    )
