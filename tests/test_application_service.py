"""
Tests for applying to offers and reviewing applications
"""
import asyncio
from dataclasses import replace
from datetime import datetime
from typing import Dict, Tuple

import pytest
from unittest.mock import AsyncMock

from internship_portal.application.services.applications import ApplicationService
from internship_portal.core.exceptions import (
    DuplicateResourceException,
    InvalidStateException,
    ResourceNotFoundException,
)
from internship_portal.domain.entities import Application
from internship_portal.domain.enums import ApplicationStatus


NOW = datetime(2024, 6, 2, 14, 0, 0)


class RacyApplicationStore:
    """
    Application store whose existence check yields to the event loop, so
    concurrent callers can all pass it; the (student, offer) key stays unique
    """

    def __init__(self):
        self.rows: Dict[Tuple[int, int], Application] = {}

    async def exists_by_student_and_offer(self, student_id: int, job_offer_id: int) -> bool:
        await asyncio.sleep(0)
        return (student_id, job_offer_id) in self.rows

    async def create(self, application: Application) -> Application:
        await asyncio.sleep(0)
        key = (application.student.id, application.job_offer.id)
        if key in self.rows:
            raise DuplicateResourceException("Application", "student_id,job_offer_id", f"{key[0]},{key[1]}")
        created = replace(application, id=len(self.rows) + 1)
        self.rows[key] = created
        return created


class TestApplicationCreate:

    @pytest.fixture
    def application_repo(self):
        repo = AsyncMock()
        repo.exists_by_student_and_offer.return_value = False
        repo.create.side_effect = lambda application: replace(application, id=500)
        return repo

    @pytest.fixture
    def offer_repo(self, offer):
        repo = AsyncMock()
        repo.get_by_id.return_value = offer
        return repo

    @pytest.fixture
    def identity_repo(self, student):
        repo = AsyncMock()
        repo.get_student.return_value = student
        return repo

    @pytest.fixture
    def service(self, application_repo, offer_repo, identity_repo):
        return ApplicationService(application_repo, offer_repo, identity_repo, clock=lambda: NOW)

    @pytest.mark.asyncio
    async def test_new_application_is_pending(self, service, offer_repo, student, offer):
        created = await service.create(student.id, offer.id)

        assert created.id == 500
        assert created.status == ApplicationStatus.PENDING
        assert created.submitted_at == NOW
        assert created.student == student
        assert created.job_offer == offer
        offer_repo.get_by_id.assert_awaited_once_with(offer.id, for_update=True)

    @pytest.mark.asyncio
    async def test_closed_offer_is_rejected(self, service, offer_repo, application_repo, student, offer):
        offer_repo.get_by_id.return_value = offer.close(NOW)

        with pytest.raises(InvalidStateException) as exc_info:
            await service.create(student.id, offer.id)

        assert str(exc_info.value) == "Cannot apply to inactive offer"
        application_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_is_rejected(self, service, application_repo, student, offer):
        application_repo.exists_by_student_and_offer.return_value = True

        with pytest.raises(DuplicateResourceException):
            await service.create(student.id, offer.id)

        application_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_student(self, service, identity_repo, offer):
        identity_repo.get_student.return_value = None

        with pytest.raises(ResourceNotFoundException):
            await service.create(999, offer.id)

    @pytest.mark.asyncio
    async def test_unknown_offer(self, service, offer_repo, student):
        offer_repo.get_by_id.return_value = None

        with pytest.raises(ResourceNotFoundException):
            await service.create(student.id, 999)

    @pytest.mark.asyncio
    async def test_concurrent_applications_create_one_row(self, offer_repo, identity_repo, student, offer):
        store = RacyApplicationStore()
        service = ApplicationService(store, offer_repo, identity_repo, clock=lambda: NOW)

        results = await asyncio.gather(
            *(service.create(student.id, offer.id) for _ in range(5)),
            return_exceptions=True,
        )

        created = [r for r in results if isinstance(r, Application)]
        rejected = [r for r in results if isinstance(r, DuplicateResourceException)]
        assert len(created) == 1
        assert len(rejected) == 4
        assert len(store.rows) == 1


class TestApplicationStatus:

    @pytest.fixture
    def pending(self, student, offer):
        return Application(id=7, student=student, job_offer=offer, submitted_at=NOW)

    @pytest.fixture
    def application_repo(self, pending):
        repo = AsyncMock()
        repo.get_by_id.return_value = pending
        repo.update_status.side_effect = lambda application_id, status: pending.with_status(status)
        return repo

    def build(self, application_repo, enforce: bool) -> ApplicationService:
        return ApplicationService(application_repo, AsyncMock(), AsyncMock(), enforce_transitions=enforce)

    @pytest.mark.asyncio
    async def test_any_status_allowed_by_default(self, application_repo, pending):
        service = self.build(application_repo, enforce=False)
        application_repo.get_by_id.return_value = pending.with_status(ApplicationStatus.REJECTED)

        updated = await service.set_status(7, ApplicationStatus.PENDING)

        assert updated.status == ApplicationStatus.PENDING

    @pytest.mark.asyncio
    async def test_review_flow_when_enforced(self, application_repo):
        service = self.build(application_repo, enforce=True)

        updated = await service.set_status(7, ApplicationStatus.UNDER_REVIEW)

        assert updated.status == ApplicationStatus.UNDER_REVIEW
        application_repo.update_status.assert_awaited_once_with(7, ApplicationStatus.UNDER_REVIEW)

    @pytest.mark.asyncio
    async def test_terminal_status_is_final_when_enforced(self, application_repo, pending):
        service = self.build(application_repo, enforce=True)
        application_repo.get_by_id.return_value = pending.with_status(ApplicationStatus.APPROVED)

        with pytest.raises(InvalidStateException):
            await service.set_status(7, ApplicationStatus.REJECTED)

        application_repo.update_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_application(self, application_repo):
        service = self.build(application_repo, enforce=False)
        application_repo.get_by_id.return_value = None

        with pytest.raises(ResourceNotFoundException):
            await service.set_status(99, ApplicationStatus.APPROVED)

    @pytest.mark.parametrize("current,target,allowed", [
        (ApplicationStatus.PENDING, ApplicationStatus.UNDER_REVIEW, True),
        (ApplicationStatus.PENDING, ApplicationStatus.APPROVED, True),
        (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.REJECTED, True),
        (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.PENDING, False),
        (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED, False),
        (ApplicationStatus.REJECTED, ApplicationStatus.UNDER_REVIEW, False),
    ])
    def test_transition_table(self, current, target, allowed):
        assert current.can_transition_to(target) is allowed
