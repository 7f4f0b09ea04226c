"""
Authentication Service Implementation
Concrete implementations of IAuthenticationManager and IAuthService
"""
from loguru import logger

from internship_portal.core.exceptions import (
    InvalidCredentialsException,
    ProfileNotFoundException,
)
from internship_portal.domain.entities import Identity
from internship_portal.domain.enums import Role
from internship_portal.application.repositories.interfaces import IIdentityRepository
from .interfaces import (
    AuthenticationResult,
    IAuthenticationManager,
    IAuthService,
    IPasswordHasher,
    ITokenService,
)


class AuthenticationManager(IAuthenticationManager):
    """Checks credentials against the identity store"""

    def __init__(
        self,
        identity_repository: IIdentityRepository,
        password_hasher: IPasswordHasher
    ):
        self.identity_repo = identity_repository
        self.password_hasher = password_hasher

    async def authenticate(self, email: str, password: str) -> Identity:
        identity = await self.identity_repo.get_by_email(email.strip())
        if not identity:
            logger.warning(f"Login failed: unknown email - {email}")
            raise InvalidCredentialsException()

        if not self.password_hasher.verify_password(password, identity.password_hash):
            logger.warning(f"Login failed: invalid password - {email}")
            raise InvalidCredentialsException()

        return identity


class AuthService(IAuthService):
    """Authentication gate implementation"""

    def __init__(
        self,
        authentication_manager: IAuthenticationManager,
        token_service: ITokenService,
        identity_repository: IIdentityRepository
    ):
        self.authentication_manager = authentication_manager
        self.token_service = token_service
        self.identity_repo = identity_repository

    async def authenticate(self, email: str, password: str) -> AuthenticationResult:
        logger.info(f"Login attempt: {email}")

        identity = await self.authentication_manager.authenticate(email, password)
        token = self.token_service.issue(str(identity.email), identity.role)

        interest_areas = None
        if identity.role == Role.COMPANY:
            profile_holder = await self.identity_repo.get_company(identity.id)
            if profile_holder is None:
                logger.error(f"Company record missing for identity {identity.id}")
                raise ProfileNotFoundException(identity.role.value, identity.id)
        elif identity.role == Role.STUDENT:
            profile_holder = await self.identity_repo.get_student(identity.id)
            if profile_holder is None:
                logger.error(f"Student record missing for identity {identity.id}")
                raise ProfileNotFoundException(identity.role.value, identity.id)
            interest_areas = profile_holder.student.interest_areas
        else:
            profile_holder = identity

        logger.info(f"User logged in successfully: {email} ({identity.role.value})")

        return AuthenticationResult(
            token=token,
            email=str(identity.email),
            role=identity.role,
            display_name=profile_holder.name,
            entity_id=profile_holder.id,
            interest_areas=interest_areas,
        )
