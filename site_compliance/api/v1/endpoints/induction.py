"""
Induction Endpoints - Public worker induction submission
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from site_compliance.db.session import get_db
from site_compliance.services.worker_service import WorkerService
from site_compliance.schemas import Worker, WorkerInductionCreate, DataResponse

router = APIRouter()
worker_service = WorkerService()


@router.post(
    "/workers",
    response_model=DataResponse[Worker],
    status_code=status.HTTP_201_CREATED
)
async def submit_induction(
    payload: WorkerInductionCreate,
    db: Session = Depends(get_db)
):
    """
    Submit a completed site induction

    **Validation:**
    - wk_email: unique (case-insensitive)
    - acknowledgements: every statement must be true

    The white card is recorded as Awaiting Review until an admin validates it.
    """
    worker = worker_service.submit_induction(db, payload)

    return DataResponse(
        success=True,
        message="Induction submitted successfully",
        data=worker
    )
