"""
Admin Service
Administrator accounts and the platform dashboard
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from loguru import logger

from internship_portal.core.exceptions import DuplicateResourceException
from internship_portal.domain.clock import utc_now
from internship_portal.domain.entities import AdminProfile, Identity
from internship_portal.domain.enums import Role
from internship_portal.domain.value_objects import Email
from internship_portal.application.repositories.interfaces import (
    IIdentityRepository,
    IJobOfferRepository,
)
from .auth.interfaces import IPasswordHasher


@dataclass(frozen=True)
class DashboardSummary:
    total_companies: int
    total_students: int
    open_offers: int
    closed_offers: int
    offers_by_area: List[Tuple[str, int]] = field(default_factory=list)


class AdminService:

    def __init__(
        self,
        identity_repository: IIdentityRepository,
        offer_repository: IJobOfferRepository,
        password_hasher: IPasswordHasher,
        clock: Callable[[], datetime] = utc_now
    ):
        self.identity_repo = identity_repository
        self.offer_repo = offer_repository
        self.password_hasher = password_hasher
        self.clock = clock

    async def create_admin(
        self,
        name: str,
        email: str,
        password: str,
        phone: str
    ) -> Identity:
        if await self.identity_repo.exists_by_email(email):
            raise DuplicateResourceException("User", "email", email)

        now = self.clock()
        admin = Identity(
            id=None,
            name=name.strip(),
            email=Email(email),
            password_hash=self.password_hasher.hash_password(password),
            role=Role.ADMIN,
            phone=phone,
            profile=AdminProfile(),
            created_at=now,
            updated_at=now,
        )
        created = await self.identity_repo.create(admin)
        logger.info(f"Administrator created: {created.email}")
        return created

    async def ensure_admin(self, name: str, email: str, password: str, phone: str) -> Optional[Identity]:
        """Create the administrator unless the email is already registered"""
        if await self.identity_repo.exists_by_email(email):
            logger.debug(f"Bootstrap administrator already present: {email}")
            return None
        return await self.create_admin(name, email, password, phone)

    async def dashboard(self) -> DashboardSummary:
        return DashboardSummary(
            total_companies=await self.identity_repo.count_by_role(Role.COMPANY),
            total_students=await self.identity_repo.count_by_role(Role.STUDENT),
            open_offers=await self.offer_repo.count_by_active(True),
            closed_offers=await self.offer_repo.count_by_active(False),
            offers_by_area=await self.offer_repo.count_active_by_area(),
        )
