"""
Job Sites Endpoints - CRUD operations for job site management
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from site_compliance.db.session import get_db
from site_compliance.services.job_site_service import JobSiteService
from site_compliance.schemas import JobSite, JobSiteCreate, JobSiteUpdate, DataResponse, PaginationResponse
from site_compliance.api.deps import require_auth, require_min_role_level
from site_compliance.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
job_site_service = JobSiteService()


@router.get(
    "/",
    response_model=PaginationResponse[JobSite],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_job_sites(
    search: str = Query("", description="Search job sites by name"),
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get list of job sites with pagination and search

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    sites = job_site_service.list_sites(db, search=search, active=active, skip=skip, limit=limit)
    total = job_site_service.count_sites(db, search=search, active=active)

    response = PaginationResponse(
        success=True,
        message="Job sites retrieved successfully",
        data=sites,
        total=total,
        page=skip // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/{js_id}",
    response_model=DataResponse[JobSite],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_job_site(
    js_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get single job site by ID

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    site = job_site_service.get_site(db, js_id)

    response = DataResponse(
        success=True,
        message="Job site retrieved successfully",
        data=site
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/",
    response_model=DataResponse[JobSite],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def create_job_site(
    site: JobSiteCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Create new job site

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Validation:**
    - js_name: required
    - js_lat / js_lng: valid WGS84 coordinates
    - js_radius_m: > 0, defaults to DEFAULT_SITE_RADIUS_M
    """
    new_site = job_site_service.create_site(db, site)

    response = DataResponse(
        success=True,
        message="Job site created successfully",
        data=new_site
    )

    return encrypt_response_data(response, settings)


@router.put(
    "/{js_id}",
    response_model=DataResponse[JobSite],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def update_job_site(
    js_id: str,
    site: JobSiteUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Update existing job site

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    updated_site = job_site_service.update_site(db, js_id, site)

    response = DataResponse(
        success=True,
        message="Job site updated successfully",
        data=updated_site
    )

    return encrypt_response_data(response, settings)


@router.delete(
    "/{js_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_min_role_level(50))]
)
async def delete_job_site(
    js_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Delete job site

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Note:**
    - Deletion will fail if the site has check-in history; deactivate it instead
    """
    job_site_service.delete_site(db, js_id)

    # 204 returns no content
    return None
