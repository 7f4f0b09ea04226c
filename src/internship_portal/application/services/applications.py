"""
Application Service
Student applications to job offers and their review status
"""
from datetime import datetime
from typing import Callable, List, Optional

from loguru import logger

from internship_portal.core.exceptions import (
    DuplicateResourceException,
    InvalidStateException,
    ResourceNotFoundException,
)
from internship_portal.domain.clock import utc_now
from internship_portal.domain.entities import Application
from internship_portal.domain.enums import ApplicationStatus
from internship_portal.application.repositories.interfaces import (
    IApplicationRepository,
    IIdentityRepository,
    IJobOfferRepository,
)


class ApplicationService:
    """
    Application lifecycle

    PENDING -> UNDER_REVIEW | APPROVED | REJECTED, UNDER_REVIEW -> APPROVED |
    REJECTED. Transitions are only checked when `enforce_transitions` is set;
    otherwise any status may be assigned.
    """

    def __init__(
        self,
        application_repository: IApplicationRepository,
        offer_repository: IJobOfferRepository,
        identity_repository: IIdentityRepository,
        enforce_transitions: bool = False,
        clock: Callable[[], datetime] = utc_now
    ):
        self.application_repo = application_repository
        self.offer_repo = offer_repository
        self.identity_repo = identity_repository
        self.enforce_transitions = enforce_transitions
        self.clock = clock

    async def create(self, student_id: int, job_offer_id: int) -> Application:
        """
        Apply a student to an offer

        Status and submission time are always set here.

        Raises:
            ResourceNotFoundException: student or offer missing
            InvalidStateException: offer is closed
            DuplicateResourceException: student already applied to the offer
        """
        student = await self.identity_repo.get_student(student_id)
        if student is None:
            raise ResourceNotFoundException("Student", student_id)

        # Row lock: a concurrent close waits for this insert, or this waits for the close
        offer = await self.offer_repo.get_by_id(job_offer_id, for_update=True)
        if offer is None:
            raise ResourceNotFoundException("JobOffer", job_offer_id)

        if not offer.is_active:
            logger.warning(f"Student {student_id} tried to apply to closed offer {job_offer_id}")
            raise InvalidStateException("Cannot apply to inactive offer")

        if await self.application_repo.exists_by_student_and_offer(student_id, job_offer_id):
            raise DuplicateResourceException(
                "Application", "student_id,job_offer_id", f"{student_id},{job_offer_id}"
            )

        application = Application(
            id=None,
            student=student,
            job_offer=offer,
            submitted_at=self.clock(),
            status=ApplicationStatus.PENDING,
        )
        created = await self.application_repo.create(application)
        logger.info(f"Application {created.id}: student {student_id} -> offer {job_offer_id}")
        return created

    async def set_status(self, application_id: int, new_status: ApplicationStatus) -> Application:
        application = await self.get(application_id)

        if self.enforce_transitions and not application.status.can_transition_to(new_status):
            raise InvalidStateException(
                f"Cannot change application status from {application.status.value} to {new_status.value}"
            )

        updated = await self.application_repo.update_status(application_id, new_status)
        logger.info(
            f"Application {application_id} status {application.status.value} -> {new_status.value}"
        )
        return updated

    async def delete(self, application_id: int) -> None:
        if not await self.application_repo.delete(application_id):
            raise ResourceNotFoundException("Application", application_id)
        logger.info(f"Application {application_id} deleted")

    async def get(self, application_id: int) -> Application:
        application = await self.application_repo.get_by_id(application_id)
        if application is None:
            raise ResourceNotFoundException("Application", application_id)
        return application

    async def find(self, student_id: int, job_offer_id: int) -> Optional[Application]:
        return await self.application_repo.get_by_student_and_offer(student_id, job_offer_id)

    async def exists(self, student_id: int, job_offer_id: int) -> bool:
        return await self.application_repo.exists_by_student_and_offer(student_id, job_offer_id)

    async def list_all(self) -> List[Application]:
        return await self.application_repo.list_all()

    async def list_by_student(self, student_id: int) -> List[Application]:
        return await self.application_repo.list_by_student(student_id)

    async def list_by_job_offer(self, job_offer_id: int) -> List[Application]:
        return await self.application_repo.list_by_job_offer(job_offer_id)

    async def list_by_company(self, company_id: int) -> List[Application]:
        return await self.application_repo.list_by_company(company_id)

    async def count_by_student(self, student_id: int) -> int:
        return await self.application_repo.count_by_student(student_id)

    async def count_by_job_offer(self, job_offer_id: int) -> int:
        return await self.application_repo.count_by_job_offer(job_offer_id)
