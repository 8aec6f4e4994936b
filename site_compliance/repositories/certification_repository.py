"""
Certification Repository - Append-only white card history
"""
from typing import Optional, List, Tuple
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import func, select

from atams.db import BaseRepository
from site_compliance.models.certification import Certification
from site_compliance.models.worker import Worker


class CertificationRepository(BaseRepository[Certification]):
    def __init__(self):
        super().__init__(Certification)

    def get_current(self, db: Session, worker_id: str, cert_type: str) -> Optional[Certification]:
        """
        Current certification = most recently created row of the type,
        ties broken by ce_id.

        Rows are never updated; a status change is a new row.
        """
        return (
            db.query(Certification)
            .filter(
                Certification.ce_worker_id == worker_id,
                Certification.ce_type == cert_type
            )
            .order_by(Certification.ce_created_at.desc(), Certification.ce_id.desc())
            .first()
        )

    def get_history(self, db: Session, worker_id: str, cert_type: str, limit: int = 50) -> List[Certification]:
        """Get a worker's certification rows, newest first"""
        return (
            db.query(Certification)
            .filter(
                Certification.ce_worker_id == worker_id,
                Certification.ce_type == cert_type
            )
            .order_by(Certification.ce_created_at.desc(), Certification.ce_id.desc())
            .limit(limit)
            .all()
        )

    def get_current_valid_expiring_between(
        self,
        db: Session,
        cert_type: str,
        start: date,
        end: date
    ) -> List[Tuple[Worker, Certification]]:
        """
        Workers whose *current* certification is Valid and expires in [start, end].

        Older rows in the history are ignored even if they match the window.
        """
        ranked = (
            select(
                Certification.ce_id.label("ce_id"),
                func.row_number().over(
                    partition_by=Certification.ce_worker_id,
                    order_by=[Certification.ce_created_at.desc(), Certification.ce_id.desc()]
                ).label("rn")
            )
            .where(Certification.ce_type == cert_type)
            .subquery()
        )

        return (
            db.query(Worker, Certification)
            .join(Certification, Certification.ce_worker_id == Worker.wk_id)
            .join(ranked, ranked.c.ce_id == Certification.ce_id)
            .filter(
                ranked.c.rn == 1,
                Certification.ce_status == "Valid",
                Certification.ce_expiry_date >= start,
                Certification.ce_expiry_date <= end
            )
            .order_by(Certification.ce_expiry_date.asc())
            .all()
        )
