"""API v1 routers"""

from .auth import router as auth_router
from .areas import router as areas_router
from .companies import router as companies_router
from .students import router as students_router
from .job_offers import router as job_offers_router
from .applications import router as applications_router
from .admin import router as admin_router
__all__ = [
    "auth_router",
    "areas_router",
    "companies_router",
    "students_router",
    "job_offers_router",
    "applications_router",
    "admin_router",
]
