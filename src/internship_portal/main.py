"""Main FastAPI Application

Wires middleware, global exception handlers and the API routers.

Run locally for development with:

    uvicorn internship_portal.main:app --reload

Keep application logic in `application`, `domain` and `infrastructure`;
this module only assembles the HTTP surface.
"""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded

from internship_portal import __version__
from internship_portal.core.config import settings
from internship_portal.core.database import init_db, close_db, get_db_session, health_check
from internship_portal.core.logging_config import configure_logging
from internship_portal.core.exceptions import (
    DomainException,
    AuthenticationException,
    AuthorizationException,
    DuplicateResourceException,
    InvalidStateException,
    RepositoryException,
    ResourceNotFoundException,
    ResumeRenderingException,
    ValidationException,
)
from internship_portal.application.services.admin import AdminService
from internship_portal.infrastructure.persistence.repositories.identity import SQLAlchemyIdentityRepository
from internship_portal.infrastructure.persistence.repositories.job_offer import SQLAlchemyJobOfferRepository
from internship_portal.presentation.api.v1.container import get_password_hasher
from internship_portal.presentation.api.v1.dependencies import enforce_authorization_policy, limiter
from internship_portal.presentation.api.v1.endpoints import (
    admin_router,
    applications_router,
    areas_router,
    auth_router,
    companies_router,
    job_offers_router,
    students_router,
)
from internship_portal.presentation.middleware import RequestLoggingMiddleware


configure_logging()


async def bootstrap_admin() -> None:
    """Create the configured administrator if it does not exist yet"""
    if not (settings.BOOTSTRAP_ADMIN_EMAIL and settings.BOOTSTRAP_ADMIN_PASSWORD):
        return
    if not settings.BOOTSTRAP_ADMIN_PHONE:
        logger.warning("BOOTSTRAP_ADMIN_PHONE is not set; skipping bootstrap administrator")
        return

    async with get_db_session() as session:
        service = AdminService(
            SQLAlchemyIdentityRepository(session),
            SQLAlchemyJobOfferRepository(session),
            get_password_hasher(),
        )
        created = await service.ensure_admin(
            settings.BOOTSTRAP_ADMIN_NAME,
            settings.BOOTSTRAP_ADMIN_EMAIL,
            settings.BOOTSTRAP_ADMIN_PASSWORD,
            settings.BOOTSTRAP_ADMIN_PHONE,
        )
        if created:
            logger.info(f"Bootstrap administrator created: {created.email}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    await init_db()
    logger.info("Database initialized")

    await bootstrap_admin()

    yield

    # Shutdown
    logger.info("Shutting down gracefully...")
    await close_db()
    logger.info("Database connections closed")


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Internship portal: students, companies and job offers",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)


# Rate limiting
app.state.limiter = limiter

app.add_middleware(RequestLoggingMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain exception"""
    if isinstance(exc, AuthenticationException):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AuthorizationException):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, ResourceNotFoundException):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DuplicateResourceException):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, (ValidationException, InvalidStateException)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (RepositoryException, ResumeRenderingException)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


# Global Exception Handlers
@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    """Handle domain-level exceptions"""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"Domain exception on {request.method} {request.url.path}: {str(exc)}")
    else:
        logger.warning(f"Domain exception: {str(exc)}")

    content = {"detail": str(exc)}
    if isinstance(exc, ValidationException):
        content["errors"] = [{"field": e.field, "message": e.message} for e in exc.errors]

    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Rate limit exceeded. Please try again later."}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are client errors (400)"""
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    logger.warning(f"Request validation failed on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler"""
    logger.opt(exception=exc).error(f"Unhandled exception: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# Include API routes; every request passes the route policy first
api_guard = [Depends(enforce_authorization_policy)]
prefix = settings.API_PREFIX.rstrip("/")

app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["Authentication"], dependencies=api_guard)
app.include_router(areas_router, prefix=f"{prefix}/areas", tags=["Areas"], dependencies=api_guard)
app.include_router(companies_router, prefix=f"{prefix}/companies", tags=["Companies"], dependencies=api_guard)
app.include_router(students_router, prefix=f"{prefix}/students", tags=["Students"], dependencies=api_guard)
app.include_router(job_offers_router, prefix=f"{prefix}/job-offers", tags=["Job Offers"], dependencies=api_guard)
app.include_router(
    applications_router,
    prefix=f"{prefix}/applications",
    tags=["Applications"],
    dependencies=api_guard
)
app.include_router(
    applications_router,
    prefix=f"{prefix}/application",
    tags=["Applications"],
    dependencies=api_guard,
    include_in_schema=False
)
app.include_router(admin_router, prefix=f"{prefix}/admin", tags=["Admin"], dependencies=api_guard)


@app.get("/health")
async def health():
    """Liveness plus database reachability"""
    database_ok = await health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": database_ok,
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("internship_portal.main:app", host="0.0.0.0", port=8080, reload=settings.DEBUG)
