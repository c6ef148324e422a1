"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from jobdispatch.api.job_types import router as job_types_router
from jobdispatch.api.jobs import router as jobs_router
from jobdispatch.api.technician import router as technician_router
from jobdispatch.api.users import router as users_router
from jobdispatch.api.admin import router as admin_router

api_router = APIRouter()
api_router.include_router(job_types_router)
api_router.include_router(jobs_router)
api_router.include_router(technician_router)
api_router.include_router(users_router)
api_router.include_router(admin_router)
