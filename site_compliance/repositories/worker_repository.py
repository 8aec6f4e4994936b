"""
Worker Repository - Data access layer for inducted workers
"""
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import or_

from atams.db import BaseRepository
from site_compliance.models.worker import Worker
from site_compliance.models.certification import Certification


class WorkerRepository(BaseRepository[Worker]):
    def __init__(self):
        super().__init__(Worker)

    def get_by_email(self, db: Session, email: str) -> Optional[Worker]:
        """Get worker by normalized (lower-case) email using ORM"""
        return db.query(Worker).filter(Worker.wk_email == email).first()

    def check_email_exists(self, db: Session, email: str) -> bool:
        return db.query(Worker.wk_id).filter(Worker.wk_email == email).first() is not None

    def _search_query(self, db: Session, search: str = ""):
        query = db.query(Worker)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Worker.wk_first_name.ilike(pattern),
                    Worker.wk_last_name.ilike(pattern),
                    Worker.wk_email.ilike(pattern)
                )
            )
        return query

    def get_workers_with_search(self, db: Session, search: str = "", skip: int = 0, limit: int = 100) -> List[Worker]:
        """Get workers with optional name/email search using ORM"""
        return (
            self._search_query(db, search)
            .order_by(Worker.wk_created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_workers_with_search(self, db: Session, search: str = "") -> int:
        return self._search_query(db, search).count()

    def create_with_certification(
        self,
        db: Session,
        worker_data: Dict[str, Any],
        certification_data: Dict[str, Any]
    ) -> Worker:
        """
        Stage a worker and their first certification row.

        Does not commit: callers wrap this in a transaction so both rows
        land together.
        """
        worker = Worker(**worker_data)
        db.add(worker)
        db.flush()

        certification = Certification(ce_worker_id=worker.wk_id, **certification_data)
        db.add(certification)
        db.flush()
        return worker
