"""
Job Site Repository - Data access layer for job sites
"""
from typing import Optional, List
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from site_compliance.models.job_site import JobSite


class JobSiteRepository(BaseRepository[JobSite]):
    def __init__(self):
        super().__init__(JobSite)

    def get_by_id(self, db: Session, site_id: str) -> Optional[JobSite]:
        """Get job site by ID using ORM"""
        return db.query(JobSite).filter(JobSite.js_id == site_id).first()

    def get_active_sites(self, db: Session) -> List[JobSite]:
        """
        Get all sites with js_active = true.

        Ordered by creation so nearest-site tie-breaks are stable.
        """
        return (
            db.query(JobSite)
            .filter(JobSite.js_active.is_(True))
            .order_by(JobSite.js_created_at.asc(), JobSite.js_id.asc())
            .all()
        )

    def _search_query(self, db: Session, search: str = "", active: Optional[bool] = None):
        query = db.query(JobSite)
        if search:
            query = query.filter(JobSite.js_name.ilike(f"%{search}%"))
        if active is not None:
            query = query.filter(JobSite.js_active.is_(active))
        return query

    def get_sites_with_search(
        self,
        db: Session,
        search: str = "",
        active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[JobSite]:
        """Get sites with optional name search and active filter using ORM"""
        return (
            self._search_query(db, search, active)
            .order_by(JobSite.js_name.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_sites_with_search(self, db: Session, search: str = "", active: Optional[bool] = None) -> int:
        return self._search_query(db, search, active).count()

    def delete_by_id(self, db: Session, site_id: str) -> bool:
        """Delete site by ID and return success status"""
        site = self.get_by_id(db, site_id)
        if site:
            db.delete(site)
            db.commit()
            return True
        return False
