"""
Company Service
Company self-registration and profile management
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from loguru import logger

from internship_portal.core.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from internship_portal.domain.clock import utc_now
from internship_portal.domain.entities import CompanyProfile, Identity
from internship_portal.domain.enums import Role
from internship_portal.domain.value_objects import Email
from internship_portal.application.repositories.interfaces import (
    IAreaRepository,
    IIdentityRepository,
)
from .auth.interfaces import IPasswordHasher
from .areas import resolve_areas


@dataclass(frozen=True)
class CompanyData:
    name: str
    email: str
    tax_id: str
    phone: str
    address: str
    password: Optional[str] = None
    area_ids: List[int] = field(default_factory=list)


class CompanyService:

    def __init__(
        self,
        identity_repository: IIdentityRepository,
        area_repository: IAreaRepository,
        password_hasher: IPasswordHasher,
        clock: Callable[[], datetime] = utc_now
    ):
        self.identity_repo = identity_repository
        self.area_repo = area_repository
        self.password_hasher = password_hasher
        self.clock = clock

    async def list_all(self) -> List[Identity]:
        return await self.identity_repo.list_by_role(Role.COMPANY)

    async def get(self, company_id: int) -> Identity:
        company = await self.identity_repo.get_company(company_id)
        if company is None:
            raise ResourceNotFoundException("Company", company_id)
        return company

    async def get_by_tax_id(self, tax_id: str) -> Identity:
        company = await self.identity_repo.get_company_by_tax_id(tax_id)
        if company is None:
            raise ResourceNotFoundException("Company", tax_id)
        return company

    async def register(self, data: CompanyData) -> Identity:
        """Create a company account; the role is always COMPANY"""
        if not data.password:
            raise ValidationException.single("senha", "Password is required")
        if await self.identity_repo.exists_by_email(data.email):
            raise DuplicateResourceException("User", "email", data.email)
        if await self.identity_repo.exists_by_tax_id(data.tax_id):
            raise DuplicateResourceException("Company", "cnpj", data.tax_id)

        areas = await resolve_areas(self.area_repo, data.area_ids)
        now = self.clock()
        company = Identity(
            id=None,
            name=data.name.strip(),
            email=Email(data.email),
            password_hash=self.password_hasher.hash_password(data.password),
            role=Role.COMPANY,
            phone=data.phone,
            profile=CompanyProfile(
                tax_id=data.tax_id,
                address=data.address,
                practice_areas=areas,
            ),
            created_at=now,
            updated_at=now,
        )
        created = await self.identity_repo.create(company)
        logger.info(f"Company registered: {created.email} ({created.id})")
        return created

    async def update(self, company_id: int, data: CompanyData) -> Identity:
        """Overwrite profile fields; the password changes only when supplied"""
        current = await self.get(company_id)

        if data.email != str(current.email) and await self.identity_repo.exists_by_email(data.email):
            raise DuplicateResourceException("User", "email", data.email)
        if data.tax_id != current.company.tax_id and await self.identity_repo.exists_by_tax_id(data.tax_id):
            raise DuplicateResourceException("Company", "cnpj", data.tax_id)

        areas = await resolve_areas(self.area_repo, data.area_ids)
        password_hash = current.password_hash
        if data.password:
            password_hash = self.password_hasher.hash_password(data.password)

        updated = current.with_updates(
            name=data.name.strip(),
            email=Email(data.email),
            password_hash=password_hash,
            phone=data.phone,
            profile=CompanyProfile(
                tax_id=data.tax_id,
                address=data.address,
                practice_areas=areas,
            ),
            updated_at=self.clock(),
        )
        return await self.identity_repo.update(updated)

    async def delete(self, company_id: int) -> None:
        await self.get(company_id)
        await self.identity_repo.delete(company_id)
        logger.info(f"Company {company_id} deleted with its job offers")
