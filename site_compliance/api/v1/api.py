from fastapi import APIRouter
from site_compliance.api.v1.endpoints import check_in, induction, workers, job_sites, attendances, maintenance

api_router = APIRouter()

# Register routes
api_router.include_router(check_in.router, prefix="/check-in", tags=["Check-in"])
api_router.include_router(induction.router, prefix="/induction", tags=["Induction"])
api_router.include_router(workers.router, prefix="/workers", tags=["Workers"])
api_router.include_router(job_sites.router, prefix="/job-sites", tags=["Job Sites"])
api_router.include_router(attendances.router, prefix="/attendances", tags=["Attendances"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["Maintenance"])
