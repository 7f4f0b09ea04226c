"""
Application Repository Implementation
SQLAlchemy-based application repository
"""
from typing import List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from internship_portal.core.exceptions import (
    DomainException,
    DuplicateResourceException,
    RepositoryException,
)
from internship_portal.domain.entities import Application
from internship_portal.domain.enums import ApplicationStatus
from internship_portal.application.repositories.interfaces import IApplicationRepository
from internship_portal.infrastructure.persistence.models import ApplicationModel, JobOfferModel
from internship_portal.infrastructure.persistence.mappers import application_to_entity


class SQLAlchemyApplicationRepository(IApplicationRepository):
    """SQLAlchemy implementation of application repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, application_id: int) -> Optional[Application]:
        try:
            model = await self._fetch(ApplicationModel.id == application_id)
            return application_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to get application: {str(e)}")

    async def get_by_student_and_offer(
        self,
        student_id: int,
        job_offer_id: int
    ) -> Optional[Application]:
        try:
            model = await self._fetch(
                (ApplicationModel.student_id == student_id)
                & (ApplicationModel.job_offer_id == job_offer_id)
            )
            return application_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get application ({student_id}, {job_offer_id}): {str(e)}")
            raise RepositoryException(f"Failed to get application: {str(e)}")

    async def exists_by_student_and_offer(self, student_id: int, job_offer_id: int) -> bool:
        try:
            result = await self.session.execute(
                select(ApplicationModel.id).where(
                    ApplicationModel.student_id == student_id,
                    ApplicationModel.job_offer_id == job_offer_id,
                )
            )
            return result.first() is not None

        except Exception as e:
            logger.error(f"Failed to check application ({student_id}, {job_offer_id}): {str(e)}")
            raise RepositoryException(f"Failed to check application existence: {str(e)}")

    async def list_all(self) -> List[Application]:
        return await self._list("all", select(ApplicationModel))

    async def list_by_student(self, student_id: int) -> List[Application]:
        return await self._list(
            f"student {student_id}",
            select(ApplicationModel).where(ApplicationModel.student_id == student_id),
        )

    async def list_by_job_offer(self, job_offer_id: int) -> List[Application]:
        return await self._list(
            f"job offer {job_offer_id}",
            select(ApplicationModel).where(ApplicationModel.job_offer_id == job_offer_id),
        )

    async def list_by_company(self, company_id: int) -> List[Application]:
        offer_ids = select(JobOfferModel.id).where(JobOfferModel.company_id == company_id)
        return await self._list(
            f"company {company_id}",
            select(ApplicationModel).where(ApplicationModel.job_offer_id.in_(offer_ids)),
        )

    async def count_by_student(self, student_id: int) -> int:
        return await self._count(ApplicationModel.student_id == student_id)

    async def count_by_job_offer(self, job_offer_id: int) -> int:
        return await self._count(ApplicationModel.job_offer_id == job_offer_id)

    async def create(self, application: Application) -> Application:
        """Insert; the unique constraint backs up the service-level duplicate check"""
        try:
            model = ApplicationModel(
                student_id=application.student.id,
                job_offer_id=application.job_offer.id,
                status=application.status.value,
                submitted_at=application.submitted_at,
            )
            self.session.add(model)
            await self.session.flush()

            return application_to_entity(await self._fetch(ApplicationModel.id == model.id))

        except IntegrityError as e:
            logger.warning(
                f"Duplicate application ({application.student.id}, {application.job_offer.id}): {str(e.orig)}"
            )
            raise DuplicateResourceException(
                "Application",
                "student_id,job_offer_id",
                f"{application.student.id},{application.job_offer.id}",
            )
        except Exception as e:
            logger.error(f"Failed to create application: {str(e)}")
            raise RepositoryException(f"Failed to create application: {str(e)}")

    async def update_status(
        self,
        application_id: int,
        status: ApplicationStatus
    ) -> Application:
        try:
            model = await self._fetch(ApplicationModel.id == application_id)
            if not model:
                raise RepositoryException(f"Application not found: {application_id}")

            model.status = status.value
            await self.session.flush()
            return application_to_entity(model)

        except DomainException:
            raise
        except Exception as e:
            logger.error(f"Failed to update application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to update application: {str(e)}")

    async def delete(self, application_id: int) -> bool:
        try:
            result = await self.session.execute(
                delete(ApplicationModel).where(ApplicationModel.id == application_id)
            )
            await self.session.flush()
            return result.rowcount > 0

        except Exception as e:
            logger.error(f"Failed to delete application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete application: {str(e)}")

    async def _fetch(self, condition) -> Optional[ApplicationModel]:
        result = await self.session.execute(
            select(ApplicationModel).where(condition).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _list(self, label: str, query) -> List[Application]:
        try:
            result = await self.session.execute(
                query.order_by(ApplicationModel.submitted_at.desc(), ApplicationModel.id.desc())
            )
            return [application_to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list applications ({label}): {str(e)}")
            raise RepositoryException(f"Failed to list applications: {str(e)}")

    async def _count(self, condition) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(ApplicationModel).where(condition)
            )
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count applications: {str(e)}")
            raise RepositoryException(f"Failed to count applications: {str(e)}")
