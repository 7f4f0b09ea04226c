"""
Dependency Injection Container
Manages service and repository instances
"""
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import Depends

from internship_portal.core.config import settings
from internship_portal.core.database import get_db
from internship_portal.application.repositories.interfaces import (
    IApplicationRepository,
    IAreaRepository,
    IIdentityRepository,
    IJobOfferRepository,
)
from internship_portal.application.services.auth.interfaces import (
    IAuthService,
    IAuthenticationManager,
    IPasswordHasher,
    ITokenService,
)
from internship_portal.application.services.resume.interfaces import IResumeRenderer
from internship_portal.application.services.security.policy import AuthorizationPolicy
from internship_portal.application.services.admin import AdminService
from internship_portal.application.services.applications import ApplicationService
from internship_portal.application.services.areas import AreaService
from internship_portal.application.services.companies import CompanyService
from internship_portal.application.services.job_offers import JobOfferService
from internship_portal.application.services.students import StudentService
from internship_portal.infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from internship_portal.infrastructure.persistence.repositories.area import SQLAlchemyAreaRepository
from internship_portal.infrastructure.persistence.repositories.identity import SQLAlchemyIdentityRepository
from internship_portal.infrastructure.persistence.repositories.job_offer import SQLAlchemyJobOfferRepository
from internship_portal.infrastructure.security.jwt_service import JwtTokenService
from internship_portal.infrastructure.security.password_hasher import BcryptPasswordHasher
from internship_portal.infrastructure.services.resume_renderer import ReportlabResumeRenderer


# Singleton instances
_password_hasher: IPasswordHasher | None = None
_token_service: ITokenService | None = None
_resume_renderer: IResumeRenderer | None = None
_authorization_policy: AuthorizationPolicy | None = None


def get_password_hasher() -> IPasswordHasher:
    """Get password hasher instance (singleton)"""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher()
    return _password_hasher


def get_token_service() -> ITokenService:
    """Get token service instance (singleton)"""
    global _token_service
    if _token_service is None:
        _token_service = JwtTokenService()
    return _token_service


def get_resume_renderer() -> IResumeRenderer:
    """Get resume renderer instance (singleton)"""
    global _resume_renderer
    if _resume_renderer is None:
        _resume_renderer = ReportlabResumeRenderer()
    return _resume_renderer


def get_authorization_policy() -> AuthorizationPolicy:
    """Get route policy instance (singleton)"""
    global _authorization_policy
    if _authorization_policy is None:
        _authorization_policy = AuthorizationPolicy()
    return _authorization_policy


# Repositories (per-request)

def get_identity_repository(session: AsyncSession = Depends(get_db)) -> IIdentityRepository:
    return SQLAlchemyIdentityRepository(session)


def get_area_repository(session: AsyncSession = Depends(get_db)) -> IAreaRepository:
    return SQLAlchemyAreaRepository(session)


def get_job_offer_repository(session: AsyncSession = Depends(get_db)) -> IJobOfferRepository:
    return SQLAlchemyJobOfferRepository(session)


def get_application_repository(session: AsyncSession = Depends(get_db)) -> IApplicationRepository:
    return SQLAlchemyApplicationRepository(session)


# Services (per-request)

def get_authentication_manager(
    identity_repo: IIdentityRepository = Depends(get_identity_repository),
    password_hasher: IPasswordHasher = Depends(get_password_hasher)
) -> IAuthenticationManager:
    from internship_portal.application.services.auth.impl import AuthenticationManager
    return AuthenticationManager(identity_repo, password_hasher)


def get_auth_service(
    authentication_manager: IAuthenticationManager = Depends(get_authentication_manager),
    token_service: ITokenService = Depends(get_token_service),
    identity_repo: IIdentityRepository = Depends(get_identity_repository)
) -> IAuthService:
    """Get auth service instance (per-request)"""
    from internship_portal.application.services.auth.impl import AuthService
    return AuthService(authentication_manager, token_service, identity_repo)


def get_area_service(
    area_repo: IAreaRepository = Depends(get_area_repository),
    offer_repo: IJobOfferRepository = Depends(get_job_offer_repository)
) -> AreaService:
    return AreaService(area_repo, offer_repo)


def get_company_service(
    identity_repo: IIdentityRepository = Depends(get_identity_repository),
    area_repo: IAreaRepository = Depends(get_area_repository),
    password_hasher: IPasswordHasher = Depends(get_password_hasher)
) -> CompanyService:
    return CompanyService(identity_repo, area_repo, password_hasher)


def get_student_service(
    identity_repo: IIdentityRepository = Depends(get_identity_repository),
    area_repo: IAreaRepository = Depends(get_area_repository),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    resume_renderer: IResumeRenderer = Depends(get_resume_renderer)
) -> StudentService:
    return StudentService(identity_repo, area_repo, password_hasher, resume_renderer)


def get_job_offer_service(
    offer_repo: IJobOfferRepository = Depends(get_job_offer_repository),
    identity_repo: IIdentityRepository = Depends(get_identity_repository),
    area_repo: IAreaRepository = Depends(get_area_repository)
) -> JobOfferService:
    return JobOfferService(offer_repo, identity_repo, area_repo)


def get_application_service(
    application_repo: IApplicationRepository = Depends(get_application_repository),
    offer_repo: IJobOfferRepository = Depends(get_job_offer_repository),
    identity_repo: IIdentityRepository = Depends(get_identity_repository)
) -> ApplicationService:
    return ApplicationService(
        application_repo,
        offer_repo,
        identity_repo,
        enforce_transitions=settings.ENFORCE_APPLICATION_TRANSITIONS,
    )


def get_admin_service(
    identity_repo: IIdentityRepository = Depends(get_identity_repository),
    offer_repo: IJobOfferRepository = Depends(get_job_offer_repository),
    password_hasher: IPasswordHasher = Depends(get_password_hasher)
) -> AdminService:
    return AdminService(identity_repo, offer_repo, password_hasher)
