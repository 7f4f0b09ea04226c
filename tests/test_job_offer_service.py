"""
Tests for the job offer lifecycle
"""
from dataclasses import replace
from datetime import datetime

import pytest
from unittest.mock import AsyncMock

from internship_portal.application.services.job_offers import JobOfferData, JobOfferService
from internship_portal.application.services.security.context import CallerContext
from internship_portal.core.exceptions import (
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
)
from internship_portal.domain.entities import Area, JobOffer
from internship_portal.domain.enums import Modality


NOW = datetime(2024, 6, 1, 9, 30, 0)


def echo_created(offer: JobOffer) -> JobOffer:
    return replace(offer, id=101)


def echo(offer: JobOffer) -> JobOffer:
    return offer


class TestJobOfferService:

    @pytest.fixture
    def offer_repo(self):
        repo = AsyncMock()
        repo.create.side_effect = echo_created
        repo.update.side_effect = echo
        return repo

    @pytest.fixture
    def identity_repo(self, company):
        repo = AsyncMock()
        repo.get_company.return_value = company
        return repo

    @pytest.fixture
    def area_repo(self, area):
        repo = AsyncMock()
        repo.get_by_id.return_value = area
        return repo

    @pytest.fixture
    def service(self, offer_repo, identity_repo, area_repo):
        return JobOfferService(offer_repo, identity_repo, area_repo, clock=lambda: NOW)

    @pytest.fixture
    def data(self):
        return JobOfferData(
            title="  Estágio Backend ",
            description="APIs em Python",
            modality=Modality.REMOTE,
            area_id=1,
            location="Recife",
            weekly_hours=30,
            requirements="Python, SQL",
        )

    @pytest.mark.asyncio
    async def test_create_sets_owner_and_lifecycle(self, service, data, company, area):
        created = await service.create(data, CallerContext(identity=company))

        assert created.id == 101
        assert created.title == "Estágio Backend"
        assert created.company == company
        assert created.area == area
        assert created.is_active is True
        assert created.closed_at is None
        assert created.created_at == NOW

    @pytest.mark.asyncio
    async def test_create_rejects_non_company(self, service, data, student, offer_repo):
        with pytest.raises(AuthorizationException):
            await service.create(data, CallerContext(identity=student))
        with pytest.raises(AuthorizationException):
            await service.create(data, CallerContext.anonymous())

        offer_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_with_unknown_area(self, service, data, company, area_repo):
        area_repo.get_by_id.return_value = None

        with pytest.raises(ResourceNotFoundException):
            await service.create(data, CallerContext(identity=company))

    @pytest.mark.asyncio
    async def test_create_without_company_record(self, service, data, company, identity_repo):
        identity_repo.get_company.return_value = None

        with pytest.raises(ResourceNotFoundException):
            await service.create(data, CallerContext(identity=company))

    @pytest.mark.asyncio
    async def test_close_active_offer(self, service, offer_repo, offer):
        offer_repo.get_by_id.return_value = offer

        closed = await service.close(offer.id)

        assert closed.is_active is False
        assert closed.closed_at == NOW
        offer_repo.get_by_id.assert_awaited_once_with(offer.id, for_update=True)

    @pytest.mark.asyncio
    async def test_close_twice_is_rejected(self, service, offer_repo, offer):
        offer_repo.get_by_id.return_value = offer.close(NOW)

        with pytest.raises(InvalidStateException):
            await service.close(offer.id)

        offer_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_unknown_offer(self, service, offer_repo):
        offer_repo.get_by_id.return_value = None

        with pytest.raises(ResourceNotFoundException):
            await service.close(999)

    @pytest.mark.asyncio
    async def test_update_keeps_owner_and_lifecycle(self, service, offer_repo, area_repo, offer):
        design = Area(id=2, name="Design")
        offer_repo.get_by_id.return_value = offer
        area_repo.get_by_id.return_value = design

        updated = await service.update(offer.id, JobOfferData(
            title="Estágio UX",
            description="Protótipos",
            modality=Modality.HYBRID,
            area_id=2,
            location="Recife",
            weekly_hours=20,
            requirements="Figma",
        ))

        assert updated.title == "Estágio UX"
        assert updated.modality == Modality.HYBRID
        assert updated.weekly_hours == 20
        assert updated.area == design
        assert updated.company == offer.company
        assert updated.created_at == offer.created_at
        assert updated.is_active is True
        assert updated.updated_at == NOW

    @pytest.mark.asyncio
    async def test_delete_unknown_offer(self, service, offer_repo):
        offer_repo.delete.return_value = False

        with pytest.raises(ResourceNotFoundException):
            await service.delete(5)

    @pytest.mark.asyncio
    async def test_list_by_missing_company_is_empty(self, service, identity_repo, offer_repo):
        identity_repo.get_company.return_value = None

        assert await service.list_active_by_company(77) == []
        offer_repo.list_active_by_company.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_by_missing_area_is_empty(self, service, area_repo, offer_repo):
        area_repo.get_by_id.return_value = None

        assert await service.list_active_by_area(77) == []
        offer_repo.list_active_by_area.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_by_no_areas_is_empty(self, service, offer_repo):
        assert await service.list_active_by_areas([]) == []
        offer_repo.list_active_by_areas.assert_not_called()

    @pytest.mark.asyncio
    async def test_statistics(self, service, offer_repo):
        offer_repo.count_by_active.side_effect = lambda active: 3 if active else 1
        offer_repo.count_active_by_area.return_value = [("Design", 1), ("Tecnologia", 2)]

        stats = await service.statistics()

        assert stats.active == 3
        assert stats.closed == 1
        assert stats.by_area == [("Design", 1), ("Tecnologia", 2)]


class TestJobOfferEntity:

    def test_closed_at_tracks_active_flag(self, company, area):
        with pytest.raises(ValueError):
            JobOffer(
                id=1, title="X", description="Y", location="Recife", modality=Modality.ON_SITE,
                weekly_hours=20, requirements="Nenhum", company=company, area=area,
                is_active=False, closed_at=None,
            )

    def test_owner_must_be_a_company(self, student, area):
        with pytest.raises(ValueError):
            JobOffer(
                id=1, title="X", description="Y", location="Recife", modality=Modality.ON_SITE,
                weekly_hours=20, requirements="Nenhum", company=student, area=area,
            )
