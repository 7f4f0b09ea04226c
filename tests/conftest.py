"""
Shared fixtures: in-memory SQLite database, HTTP client and sample entities
"""
import os

# Settings are read on first import of the package
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_JSON_FORMAT", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date, datetime

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from internship_portal.core.database import Base, create_session_factory, get_db
from internship_portal.domain.entities import (
    Area,
    CompanyProfile,
    Education,
    Experience,
    Identity,
    JobOffer,
    Skill,
    StudentProfile,
)
from internship_portal.domain.enums import Modality, Role
from internship_portal.domain.value_objects import Email
from internship_portal.infrastructure.persistence import models  # noqa: F401


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app, one committed unit of work per request"""
    from internship_portal.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# Sample entities

@pytest.fixture
def area():
    return Area(id=1, name="Tecnologia")


@pytest.fixture
def company(area):
    return Identity(
        id=10,
        name="Tech Ltda",
        email=Email("rh@tech.com.br"),
        password_hash="hashed",
        role=Role.COMPANY,
        phone="(81) 3333-4444",
        profile=CompanyProfile(
            tax_id="12.345.678/0001-99",
            address="Rua A, 100",
            practice_areas=(area,),
        ),
    )


@pytest.fixture
def student(area):
    return Identity(
        id=20,
        name="Ana Souza",
        email=Email("ana@aluno.edu.br"),
        password_hash="hashed",
        role=Role.STUDENT,
        phone="(81) 99999-0000",
        profile=StudentProfile(
            national_id="123.456.789-00",
            course="Ciência da Computação",
            birthdate=date(2001, 5, 17),
            github="https://github.com/ana",
            bio="Estudante interessada em backend.",
            education=(
                Education(
                    institution="UFPE",
                    course="Ciência da Computação",
                    level="Graduação",
                    start_date=date(2020, 2, 1),
                    in_progress=True,
                ),
            ),
            experience=(
                Experience(
                    company="Startup X",
                    role_title="Estagiária",
                    start_date=date(2023, 1, 1),
                    end_date=date(2023, 12, 1),
                ),
            ),
            skills=(Skill(name="Python", level=4, category="Backend"),),
            interest_areas=(area,),
        ),
    )


@pytest.fixture
def admin():
    return Identity(
        id=1,
        name="Administrador",
        email=Email("admin@portal.com"),
        password_hash="hashed",
        role=Role.ADMIN,
        phone="(81) 3000-0000",
    )


@pytest.fixture
def offer(company, area):
    return JobOffer(
        id=100,
        title="Estágio Backend",
        description="APIs em Python",
        location="Recife",
        modality=Modality.REMOTE,
        weekly_hours=30,
        requirements="Python, SQL",
        company=company,
        area=area,
        created_at=datetime(2024, 3, 1, 12, 0, 0),
    )
