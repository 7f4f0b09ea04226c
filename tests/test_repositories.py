"""
Repository tests against an in-memory SQLite database
"""
from dataclasses import replace
from datetime import date, datetime

import pytest
from sqlalchemy.dialects import postgresql
from unittest.mock import patch

from internship_portal.core.exceptions import DuplicateResourceException
from internship_portal.domain.entities import (
    Application,
    Area,
    CompanyProfile,
    Identity,
    JobOffer,
    Skill,
    StudentProfile,
)
from internship_portal.domain.enums import ApplicationStatus, Modality, Role
from internship_portal.domain.value_objects import Email
from internship_portal.infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from internship_portal.infrastructure.persistence.repositories.area import SQLAlchemyAreaRepository
from internship_portal.infrastructure.persistence.repositories.identity import SQLAlchemyIdentityRepository
from internship_portal.infrastructure.persistence.repositories.job_offer import SQLAlchemyJobOfferRepository


CREATED = datetime(2024, 2, 1, 10, 0, 0)


@pytest.fixture
def area_repo(session):
    return SQLAlchemyAreaRepository(session)


@pytest.fixture
def identity_repo(session):
    return SQLAlchemyIdentityRepository(session)


@pytest.fixture
def offer_repo(session):
    return SQLAlchemyJobOfferRepository(session)


@pytest.fixture
def application_repo(session):
    return SQLAlchemyApplicationRepository(session)


@pytest.fixture
async def tech(area_repo):
    return await area_repo.create(Area(id=None, name="Tecnologia"))


@pytest.fixture
async def stored_company(identity_repo, tech):
    return await identity_repo.create(Identity(
        id=None,
        name="Tech Ltda",
        email=Email("rh@tech.com.br"),
        password_hash="hash",
        role=Role.COMPANY,
        phone="(81) 3333-4444",
        profile=CompanyProfile(tax_id="12.345.678/0001-99", address="Rua A", practice_areas=(tech,)),
        created_at=CREATED,
    ))


@pytest.fixture
async def stored_student(identity_repo, tech):
    return await identity_repo.create(Identity(
        id=None,
        name="Ana Souza",
        email=Email("ana@aluno.edu.br"),
        password_hash="hash",
        role=Role.STUDENT,
        phone="(81) 99999-0000",
        profile=StudentProfile(
            national_id="123.456.789-00",
            course="Computação",
            birthdate=date(2001, 5, 17),
            skills=(Skill(name="Python", level=4),),
            interest_areas=(tech,),
        ),
        created_at=CREATED,
    ))


@pytest.fixture
async def stored_offer(offer_repo, stored_company, tech):
    return await offer_repo.create(JobOffer(
        id=None,
        title="Estágio Backend",
        description="APIs",
        location="Recife",
        modality=Modality.REMOTE,
        weekly_hours=30,
        requirements="Python",
        company=stored_company,
        area=tech,
        created_at=CREATED,
    ))


class TestIdentityRepository:

    @pytest.mark.asyncio
    async def test_company_round_trip(self, identity_repo, stored_company, tech):
        loaded = await identity_repo.get_company_by_tax_id("12.345.678/0001-99")

        assert loaded.id == stored_company.id
        assert loaded.role == Role.COMPANY
        assert loaded.company.practice_areas == (tech,)
        assert (await identity_repo.get_by_email("rh@tech.com.br")).company.tax_id == "12.345.678/0001-99"

    @pytest.mark.asyncio
    async def test_student_profile_is_stored(self, identity_repo, stored_student):
        loaded = await identity_repo.get_student(stored_student.id)

        assert loaded.student.birthdate == date(2001, 5, 17)
        assert loaded.student.skills == (Skill(name="Python", level=4),)
        assert [a.name for a in loaded.student.interest_areas] == ["Tecnologia"]

    @pytest.mark.asyncio
    async def test_role_lookups_do_not_cross(self, identity_repo, stored_company, stored_student):
        assert await identity_repo.get_student(stored_company.id) is None
        assert await identity_repo.get_company(stored_student.id) is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, identity_repo, stored_company):
        with pytest.raises(DuplicateResourceException):
            await identity_repo.create(Identity(
                id=None,
                name="Outra",
                email=Email("rh@tech.com.br"),
                password_hash="hash",
                role=Role.COMPANY,
                phone="(81) 3222-1111",
                profile=CompanyProfile(tax_id="98.765.432/0001-11", address="Rua B"),
            ))

    @pytest.mark.asyncio
    async def test_update_profile_and_account(self, identity_repo, stored_student):
        updated = await identity_repo.update(stored_student.with_updates(
            name="Ana S. Souza",
            profile=replace(stored_student.student, course="Engenharia", interest_areas=()),
        ))

        assert updated.name == "Ana S. Souza"
        assert updated.student.course == "Engenharia"
        assert updated.student.interest_areas == ()

    @pytest.mark.asyncio
    async def test_counts_by_role(self, identity_repo, stored_company, stored_student):
        assert await identity_repo.count_by_role(Role.COMPANY) == 1
        assert await identity_repo.count_by_role(Role.STUDENT) == 1
        assert await identity_repo.count_by_role(Role.ADMIN) == 0


class TestJobOfferRepository:

    @pytest.mark.asyncio
    async def test_create_and_close(self, offer_repo, stored_offer):
        assert stored_offer.id is not None
        assert stored_offer.is_active is True

        closed = await offer_repo.update(stored_offer.close(datetime(2024, 3, 1)))

        assert closed.is_active is False
        assert closed.closed_at == datetime(2024, 3, 1)
        assert await offer_repo.list_active() == []
        assert [o.id for o in await offer_repo.list_all()] == [stored_offer.id]

    @pytest.mark.asyncio
    async def test_active_filters(self, offer_repo, stored_offer, stored_company, tech):
        assert [o.id for o in await offer_repo.list_active_by_company(stored_company.id)] == [stored_offer.id]
        assert [o.id for o in await offer_repo.list_active_by_area(tech.id)] == [stored_offer.id]
        assert [o.id for o in await offer_repo.list_active_by_areas([tech.id, 999])] == [stored_offer.id]
        assert await offer_repo.list_active_by_areas([999]) == []

    @pytest.mark.asyncio
    async def test_statistics_queries(self, offer_repo, stored_offer, tech):
        assert await offer_repo.count_by_active(True) == 1
        assert await offer_repo.count_by_active(False) == 0
        assert await offer_repo.count_active_by_area() == [("Tecnologia", 1)]
        assert await offer_repo.exists_by_area(tech.id) is True

    @pytest.mark.asyncio
    async def test_locked_fetch_selects_for_update(self, offer_repo, session, stored_offer):
        with patch.object(session, "execute", wraps=session.execute) as execute:
            locked = await offer_repo.get_by_id(stored_offer.id, for_update=True)
            plain = await offer_repo.get_by_id(stored_offer.id)

        assert locked.id == plain.id == stored_offer.id
        locked_sql, plain_sql = (
            str(call.args[0].compile(dialect=postgresql.dialect())) for call in execute.call_args_list[:2]
        )
        assert "FOR UPDATE OF job_offers" in locked_sql
        assert "FOR UPDATE" not in plain_sql


class TestApplicationRepository:

    @pytest.mark.asyncio
    async def test_create_and_query(self, application_repo, stored_student, stored_offer, stored_company):
        created = await application_repo.create(Application(
            id=None, student=stored_student, job_offer=stored_offer, submitted_at=CREATED,
        ))

        assert created.status == ApplicationStatus.PENDING
        assert await application_repo.exists_by_student_and_offer(stored_student.id, stored_offer.id)
        assert await application_repo.count_by_student(stored_student.id) == 1
        assert await application_repo.count_by_job_offer(stored_offer.id) == 1
        assert [a.id for a in await application_repo.list_by_company(stored_company.id)] == [created.id]

        found = await application_repo.get_by_student_and_offer(stored_student.id, stored_offer.id)
        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_unique_pair_backstop(self, application_repo, stored_student, stored_offer):
        application = Application(id=None, student=stored_student, job_offer=stored_offer, submitted_at=CREATED)
        await application_repo.create(application)

        with pytest.raises(DuplicateResourceException):
            await application_repo.create(application)

    @pytest.mark.asyncio
    async def test_update_status(self, application_repo, stored_student, stored_offer):
        created = await application_repo.create(Application(
            id=None, student=stored_student, job_offer=stored_offer, submitted_at=CREATED,
        ))

        updated = await application_repo.update_status(created.id, ApplicationStatus.APPROVED)

        assert updated.status == ApplicationStatus.APPROVED
        assert (await application_repo.get_by_id(created.id)).status == ApplicationStatus.APPROVED


class TestCascades:

    @pytest.mark.asyncio
    async def test_deleting_offer_removes_its_applications(
        self, offer_repo, application_repo, stored_student, stored_offer
    ):
        await application_repo.create(Application(
            id=None, student=stored_student, job_offer=stored_offer, submitted_at=CREATED,
        ))

        assert await offer_repo.delete(stored_offer.id) is True
        assert await application_repo.count_by_student(stored_student.id) == 0

    @pytest.mark.asyncio
    async def test_deleting_company_removes_offers_and_applications(
        self, identity_repo, offer_repo, application_repo, stored_company, stored_student, stored_offer
    ):
        await application_repo.create(Application(
            id=None, student=stored_student, job_offer=stored_offer, submitted_at=CREATED,
        ))

        assert await identity_repo.delete(stored_company.id) is True
        assert await identity_repo.get_by_id(stored_company.id) is None
        assert await offer_repo.get_by_id(stored_offer.id) is None
        assert await application_repo.count_by_student(stored_student.id) == 0

    @pytest.mark.asyncio
    async def test_deleting_student_removes_applications(
        self, identity_repo, application_repo, stored_student, stored_offer
    ):
        await application_repo.create(Application(
            id=None, student=stored_student, job_offer=stored_offer, submitted_at=CREATED,
        ))

        assert await identity_repo.delete(stored_student.id) is True
        assert await identity_repo.get_student(stored_student.id) is None
        assert await application_repo.count_by_job_offer(stored_offer.id) == 0
