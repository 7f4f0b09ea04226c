"""
Job Offer Service
Offer lifecycle: ACTIVE -> CLOSED (terminal)
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, List, Sequence, Tuple

from loguru import logger

from internship_portal.core.exceptions import (
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
)
from internship_portal.domain.clock import utc_now
from internship_portal.domain.entities import JobOffer
from internship_portal.domain.enums import Modality, Role
from internship_portal.application.repositories.interfaces import (
    IAreaRepository,
    IIdentityRepository,
    IJobOfferRepository,
)
from .security.context import CallerContext


@dataclass(frozen=True)
class JobOfferData:
    """Mutable fields of an offer as supplied by a company"""

    title: str
    description: str
    modality: Modality
    area_id: int
    location: str
    weekly_hours: int
    requirements: str


@dataclass(frozen=True)
class JobOfferStatistics:
    active: int
    closed: int
    by_area: List[Tuple[str, int]] = field(default_factory=list)


class JobOfferService:
    """Creates, edits, closes and queries job offers"""

    def __init__(
        self,
        offer_repository: IJobOfferRepository,
        identity_repository: IIdentityRepository,
        area_repository: IAreaRepository,
        clock: Callable[[], datetime] = utc_now
    ):
        self.offer_repo = offer_repository
        self.identity_repo = identity_repository
        self.area_repo = area_repository
        self.clock = clock

    async def create(self, data: JobOfferData, caller: CallerContext) -> JobOffer:
        """
        Publish a new offer owned by the calling company

        The owning company is always the caller's own record; any company in
        the payload is ignored.
        """
        if not caller.has_role(Role.COMPANY):
            raise AuthorizationException("Only companies can create job offers")

        company = await self.identity_repo.get_company(caller.identity.id)
        if company is None:
            raise ResourceNotFoundException("Company", caller.identity.id)

        area = await self._get_area(data.area_id)

        offer = JobOffer(
            id=None,
            title=data.title.strip(),
            description=data.description,
            location=data.location,
            modality=data.modality,
            weekly_hours=data.weekly_hours,
            requirements=data.requirements,
            company=company,
            area=area,
            is_active=True,
            created_at=self.clock(),
        )
        created = await self.offer_repo.create(offer)
        logger.info(f"Job offer {created.id} created by company {company.id}")
        return created

    async def close(self, offer_id: int) -> JobOffer:
        """Serialized with applications to the same offer through the row lock"""
        offer = await self.offer_repo.get_by_id(offer_id, for_update=True)
        if offer is None:
            raise ResourceNotFoundException("JobOffer", offer_id)
        if not offer.is_active:
            raise InvalidStateException(f"Job offer {offer_id} is already closed")

        closed = await self.offer_repo.update(offer.close(self.clock()))
        logger.info(f"Job offer {offer_id} closed")
        return closed

    async def update(self, offer_id: int, data: JobOfferData) -> JobOffer:
        """Full replace of the mutable fields; owner and lifecycle are kept"""
        offer = await self.get(offer_id)
        area = await self._get_area(data.area_id)

        updated = replace(
            offer,
            title=data.title.strip(),
            description=data.description,
            location=data.location,
            modality=data.modality,
            weekly_hours=data.weekly_hours,
            requirements=data.requirements,
            area=area,
            updated_at=self.clock(),
        )
        return await self.offer_repo.update(updated)

    async def delete(self, offer_id: int) -> None:
        if not await self.offer_repo.delete(offer_id):
            raise ResourceNotFoundException("JobOffer", offer_id)
        logger.info(f"Job offer {offer_id} deleted")

    async def get(self, offer_id: int) -> JobOffer:
        offer = await self.offer_repo.get_by_id(offer_id)
        if offer is None:
            raise ResourceNotFoundException("JobOffer", offer_id)
        return offer

    async def list_all(self) -> List[JobOffer]:
        return await self.offer_repo.list_all()

    async def list_active(self) -> List[JobOffer]:
        return await self.offer_repo.list_active()

    async def list_active_by_company(self, company_id: int) -> List[JobOffer]:
        if await self.identity_repo.get_company(company_id) is None:
            return []
        return await self.offer_repo.list_active_by_company(company_id)

    async def list_active_by_area(self, area_id: int) -> List[JobOffer]:
        if await self.area_repo.get_by_id(area_id) is None:
            return []
        return await self.offer_repo.list_active_by_area(area_id)

    async def list_active_by_areas(self, area_ids: Sequence[int]) -> List[JobOffer]:
        if not area_ids:
            return []
        return await self.offer_repo.list_active_by_areas(list(area_ids))

    async def statistics(self) -> JobOfferStatistics:
        return JobOfferStatistics(
            active=await self.offer_repo.count_by_active(True),
            closed=await self.offer_repo.count_by_active(False),
            by_area=await self.offer_repo.count_active_by_area(),
        )

    async def _get_area(self, area_id: int):
        area = await self.area_repo.get_by_id(area_id)
        if area is None:
            raise ResourceNotFoundException("Area", area_id)
        return area
