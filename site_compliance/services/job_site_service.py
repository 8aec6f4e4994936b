"""
Job Site Service - Business logic for job site management
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from site_compliance.repositories.job_site_repository import JobSiteRepository
from site_compliance.schemas.job_site import JobSiteCreate, JobSiteUpdate, JobSite
from site_compliance.core.config import settings
from atams.exceptions import (
    NotFoundException,
    ConflictException,
)


class JobSiteService:
    def __init__(self) -> None:
        self.repo = JobSiteRepository()

    def list_sites(
        self,
        db: Session,
        search: str = "",
        active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[JobSite]:
        sites = self.repo.get_sites_with_search(db, search=search, active=active, skip=skip, limit=limit)
        return [JobSite.model_validate(s) for s in sites]

    def count_sites(self, db: Session, search: str = "", active: Optional[bool] = None) -> int:
        return self.repo.count_sites_with_search(db, search=search, active=active)

    def get_site(self, db: Session, js_id: str) -> JobSite:
        site = self.repo.get_by_id(db, js_id)
        if not site:
            raise NotFoundException("Job site not found")
        return JobSite.model_validate(site)

    def create_site(self, db: Session, payload: JobSiteCreate) -> JobSite:
        obj = self.repo.create(db, {
            "js_name": payload.js_name.strip(),
            "js_lat": payload.js_lat,
            "js_lng": payload.js_lng,
            "js_radius_m": payload.js_radius_m or settings.DEFAULT_SITE_RADIUS_M,
            "js_active": payload.js_active,
        })
        return JobSite.model_validate(obj)

    def update_site(self, db: Session, js_id: str, payload: JobSiteUpdate) -> JobSite:
        obj = self.repo.get_by_id(db, js_id)
        if not obj:
            raise NotFoundException("Job site not found")
        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "js_name" in update_data:
            update_data["js_name"] = update_data["js_name"].strip()
        obj = self.repo.update(db, obj, update_data)
        return JobSite.model_validate(obj)

    def delete_site(self, db: Session, js_id: str) -> None:
        # FK from site_attendances refuses deletion of a visited site
        try:
            deleted = self.repo.delete_by_id(db, js_id)
        except IntegrityError:
            db.rollback()
            raise ConflictException("Job site has check-in history and cannot be deleted; deactivate it instead")
        if not deleted:
            raise NotFoundException("Job site not found")
        return None
