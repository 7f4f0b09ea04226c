"""
Job Offer Repository Implementation
SQLAlchemy-based job offer repository
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from internship_portal.core.exceptions import DomainException, RepositoryException
from internship_portal.domain.entities import JobOffer
from internship_portal.application.repositories.interfaces import IJobOfferRepository
from internship_portal.infrastructure.persistence.models import (
    ApplicationModel,
    AreaModel,
    JobOfferModel,
)
from internship_portal.infrastructure.persistence.mappers import offer_to_entity


class SQLAlchemyJobOfferRepository(IJobOfferRepository):
    """SQLAlchemy implementation of job offer repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, offer_id: int, for_update: bool = False) -> Optional[JobOffer]:
        try:
            model = await self._fetch(offer_id, for_update)
            return offer_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get job offer {offer_id}: {str(e)}")
            raise RepositoryException(f"Failed to get job offer: {str(e)}")

    async def list_all(self) -> List[JobOffer]:
        return await self._list("all", select(JobOfferModel))

    async def list_active(self) -> List[JobOffer]:
        return await self._list("active", select(JobOfferModel).where(JobOfferModel.is_active.is_(True)))

    async def list_active_by_company(self, company_id: int) -> List[JobOffer]:
        return await self._list(
            f"company {company_id}",
            select(JobOfferModel).where(
                JobOfferModel.company_id == company_id,
                JobOfferModel.is_active.is_(True),
            ),
        )

    async def list_active_by_area(self, area_id: int) -> List[JobOffer]:
        return await self._list(
            f"area {area_id}",
            select(JobOfferModel).where(
                JobOfferModel.area_id == area_id,
                JobOfferModel.is_active.is_(True),
            ),
        )

    async def list_active_by_areas(self, area_ids: Sequence[int]) -> List[JobOffer]:
        return await self._list(
            f"areas {list(area_ids)}",
            select(JobOfferModel).where(
                JobOfferModel.area_id.in_(list(area_ids)),
                JobOfferModel.is_active.is_(True),
            ),
        )

    async def count_by_active(self, is_active: bool) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(JobOfferModel).where(JobOfferModel.is_active.is_(is_active))
            )
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count job offers: {str(e)}")
            raise RepositoryException(f"Failed to count job offers: {str(e)}")

    async def count_active_by_area(self) -> List[Tuple[str, int]]:
        try:
            result = await self.session.execute(
                select(AreaModel.name, func.count(JobOfferModel.id))
                .join(JobOfferModel, JobOfferModel.area_id == AreaModel.id)
                .where(JobOfferModel.is_active.is_(True))
                .group_by(AreaModel.name)
                .order_by(AreaModel.name)
            )
            return [(name, count) for name, count in result.all()]

        except Exception as e:
            logger.error(f"Failed to count job offers by area: {str(e)}")
            raise RepositoryException(f"Failed to count job offers by area: {str(e)}")

    async def exists_by_area(self, area_id: int) -> bool:
        try:
            result = await self.session.execute(
                select(JobOfferModel.id).where(JobOfferModel.area_id == area_id).limit(1)
            )
            return result.first() is not None

        except Exception as e:
            logger.error(f"Failed to check job offers for area {area_id}: {str(e)}")
            raise RepositoryException(f"Failed to check job offers: {str(e)}")

    async def create(self, offer: JobOffer) -> JobOffer:
        try:
            model = JobOfferModel(company_id=offer.company.id)
            self._apply(model, offer)
            model.is_active = offer.is_active
            model.created_at = offer.created_at
            model.closed_at = offer.closed_at
            self.session.add(model)
            await self.session.flush()

            return offer_to_entity(await self._fetch(model.id))

        except Exception as e:
            logger.error(f"Failed to create job offer {offer.title}: {str(e)}")
            raise RepositoryException(f"Failed to create job offer: {str(e)}")

    async def update(self, offer: JobOffer) -> JobOffer:
        try:
            model = await self._fetch(offer.id)
            if not model:
                raise RepositoryException(f"Job offer not found: {offer.id}")

            # company_id and created_at are never rewritten
            self._apply(model, offer)
            model.is_active = offer.is_active
            model.updated_at = offer.updated_at
            model.closed_at = offer.closed_at
            await self.session.flush()

            return offer_to_entity(await self._fetch(offer.id))

        except DomainException:
            raise
        except Exception as e:
            logger.error(f"Failed to update job offer {offer.id}: {str(e)}")
            raise RepositoryException(f"Failed to update job offer: {str(e)}")

    async def delete(self, offer_id: int) -> bool:
        try:
            await self.session.execute(
                delete(ApplicationModel).where(ApplicationModel.job_offer_id == offer_id)
            )
            result = await self.session.execute(delete(JobOfferModel).where(JobOfferModel.id == offer_id))
            await self.session.flush()
            return result.rowcount > 0

        except Exception as e:
            logger.error(f"Failed to delete job offer {offer_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete job offer: {str(e)}")

    async def _fetch(self, offer_id: int, for_update: bool = False) -> Optional[JobOfferModel]:
        query = (
            select(JobOfferModel)
            .where(JobOfferModel.id == offer_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            # Lock only the offer row, not the eagerly joined company/area rows
            query = query.with_for_update(of=JobOfferModel)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def _list(self, label: str, query) -> List[JobOffer]:
        try:
            result = await self.session.execute(
                query.order_by(JobOfferModel.created_at.desc(), JobOfferModel.id.desc())
            )
            return [offer_to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list job offers ({label}): {str(e)}")
            raise RepositoryException(f"Failed to list job offers: {str(e)}")

    @staticmethod
    def _apply(model: JobOfferModel, offer: JobOffer) -> None:
        model.title = offer.title
        model.description = offer.description
        model.location = offer.location
        model.modality = offer.modality.value
        model.weekly_hours = offer.weekly_hours
        model.requirements = offer.requirements
        model.area_id = offer.area.id
