"""
Worker Service - Induction submissions and white card history
"""
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session

from site_compliance.repositories.worker_repository import WorkerRepository
from site_compliance.repositories.certification_repository import CertificationRepository
from site_compliance.schemas.worker import Worker, WorkerDetail, WorkerInductionCreate
from site_compliance.schemas.certification import Certification, CertificationCreate
from site_compliance.core.config import settings
from atams.transaction import transaction
from atams.logging import get_logger
from atams.exceptions import (
    NotFoundException,
    BadRequestException,
    ConflictException,
)

logger = get_logger(__name__)

AWAITING_REVIEW = "Awaiting Review"


class WorkerService:
    def __init__(self) -> None:
        self.repo = WorkerRepository()
        self.cert_repo = CertificationRepository()

    def submit_induction(
        self,
        db: Session,
        payload: WorkerInductionCreate,
        now: Optional[datetime] = None
    ) -> Worker:
        """
        Record a completed induction

        Creates the worker and their first white card row (Awaiting Review)
        together; an admin validates the card afterwards.

        Raises:
            BadRequestException: If any safety acknowledgement is not accepted
            ConflictException: If the email is already registered
        """
        if not payload.acknowledgements.all_accepted():
            raise BadRequestException("All safety acknowledgements must be accepted")

        email = payload.wk_email.strip().lower()
        if self.repo.check_email_exists(db, email):
            raise ConflictException("A worker with this email has already completed induction")

        now = now or datetime.now(timezone.utc)

        with transaction(db):
            worker = self.repo.create_with_certification(
                db,
                worker_data={
                    "wk_email": email,
                    "wk_first_name": payload.wk_first_name.strip(),
                    "wk_last_name": payload.wk_last_name.strip() if payload.wk_last_name else None,
                    "wk_mobile": payload.wk_mobile,
                    "wk_trade": payload.wk_trade,
                    "wk_position": payload.wk_position,
                    "wk_emergency_name": payload.wk_emergency_name,
                    "wk_emergency_phone": payload.wk_emergency_phone,
                    "wk_emergency_relationship": payload.wk_emergency_relationship,
                    "wk_induction_completed": True,
                    "wk_induction_completed_at": now,
                    "wk_created_at": now,
                },
                certification_data={
                    "ce_type": settings.WHITE_CARD_TYPE,
                    "ce_status": AWAITING_REVIEW,
                    "ce_number": payload.white_card_number,
                    "ce_expiry_date": payload.white_card_expiry_date,
                    "ce_created_at": now,
                }
            )

        db.refresh(worker)
        logger.info("Induction recorded", extra={'extra_data': {'worker_id': worker.wk_id}})
        return Worker.model_validate(worker)

    def list_workers(self, db: Session, search: str = "", skip: int = 0, limit: int = 100) -> List[Worker]:
        workers = self.repo.get_workers_with_search(db, search=search, skip=skip, limit=limit)
        return [Worker.model_validate(w) for w in workers]

    def count_workers(self, db: Session, search: str = "") -> int:
        return self.repo.count_workers_with_search(db, search=search)

    def get_worker(self, db: Session, wk_id: str) -> WorkerDetail:
        worker = self.repo.get(db, wk_id)
        if not worker:
            raise NotFoundException("Worker not found")

        current = self.cert_repo.get_current(db, wk_id, settings.WHITE_CARD_TYPE)
        detail = WorkerDetail.model_validate(worker)
        detail.current_certification = Certification.model_validate(current) if current else None
        return detail

    def update_certification(
        self,
        db: Session,
        wk_id: str,
        payload: CertificationCreate,
        now: Optional[datetime] = None
    ) -> Certification:
        """
        Append a white card status change

        History rows are never edited; the newest row becomes current.
        """
        if not self.repo.get(db, wk_id):
            raise NotFoundException("Worker not found")

        now = now or datetime.now(timezone.utc)
        if payload.ce_status == "Valid":
            if payload.ce_expiry_date is None:
                raise BadRequestException("A valid white card requires an expiry date")
            if payload.ce_expiry_date < now.date():
                raise BadRequestException("A valid white card cannot have an expiry date in the past")

        cert = self.cert_repo.create(db, {
            "ce_worker_id": wk_id,
            "ce_type": settings.WHITE_CARD_TYPE,
            "ce_status": payload.ce_status,
            "ce_number": payload.ce_number,
            "ce_expiry_date": payload.ce_expiry_date,
            "ce_created_at": now,
        })
        logger.info("Certification updated", extra={'extra_data': {
            'worker_id': wk_id, 'status': payload.ce_status
        }})
        return Certification.model_validate(cert)
