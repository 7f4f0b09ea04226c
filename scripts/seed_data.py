"""
Seed Data Script
Populates database with sample data for local development
"""
import asyncio
from datetime import date

from internship_portal.application.services.admin import AdminService
from internship_portal.application.services.applications import ApplicationService
from internship_portal.application.services.areas import AreaService
from internship_portal.application.services.companies import CompanyData, CompanyService
from internship_portal.application.services.job_offers import JobOfferData, JobOfferService
from internship_portal.application.services.security.context import CallerContext
from internship_portal.application.services.students import StudentData, StudentService
from internship_portal.core.database import close_db, get_db_session, init_db
from internship_portal.domain.entities import Education, Skill
from internship_portal.domain.enums import Modality
from internship_portal.infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from internship_portal.infrastructure.persistence.repositories.area import SQLAlchemyAreaRepository
from internship_portal.infrastructure.persistence.repositories.identity import SQLAlchemyIdentityRepository
from internship_portal.infrastructure.persistence.repositories.job_offer import SQLAlchemyJobOfferRepository
from internship_portal.infrastructure.security.password_hasher import BcryptPasswordHasher
from internship_portal.infrastructure.services.resume_renderer import ReportlabResumeRenderer


AREA_NAMES = ["Tecnologia", "Design", "Marketing", "Engenharia"]


async def seed_database():
    """Seed database with sample data"""
    await init_db()

    async with get_db_session() as session:
        identities = SQLAlchemyIdentityRepository(session)
        areas_repo = SQLAlchemyAreaRepository(session)
        offers_repo = SQLAlchemyJobOfferRepository(session)
        hasher = BcryptPasswordHasher()

        if await identities.exists_by_email("admin@portal.com"):
            print("Database already seeded.")
            return

        # Areas
        area_service = AreaService(areas_repo, offers_repo)
        areas = {name: await area_service.create(name) for name in AREA_NAMES}

        # Administrator
        await AdminService(identities, offers_repo, hasher).create_admin(
            "Administrador", "admin@portal.com", "admin123", "(81) 3000-0000"
        )

        # Company
        company = await CompanyService(identities, areas_repo, hasher).register(CompanyData(
            name="Tech Solutions Ltda",
            email="rh@techsolutions.com.br",
            tax_id="12.345.678/0001-99",
            password="empresa123",
            phone="(81) 3333-4444",
            address="Av. Boa Viagem, 1000 - Recife/PE",
            area_ids=[areas["Tecnologia"].id, areas["Design"].id],
        ))

        # Student
        student = await StudentService(
            identities, areas_repo, hasher, ReportlabResumeRenderer()
        ).register(StudentData(
            name="Ana Souza",
            email="ana.souza@aluno.edu.br",
            national_id="123.456.789-00",
            password="aluna123",
            phone="(81) 98888-7777",
            course="Ciência da Computação",
            birthdate=date(2001, 5, 17),
            github="https://github.com/anasouza",
            bio="Estudante de computação com interesse em desenvolvimento backend.",
            education=[Education(
                institution="UFPE",
                course="Ciência da Computação",
                level="Graduação",
                start_date=date(2020, 2, 1),
                in_progress=True,
            )],
            skills=[Skill(name="Python", level=4, category="Backend"), Skill(name="SQL", level=3)],
            interest_area_ids=[areas["Tecnologia"].id],
        ))

        # Job offers
        offer_service = JobOfferService(offers_repo, identities, areas_repo)
        caller = CallerContext(identity=company)
        backend = await offer_service.create(JobOfferData(
            title="Estágio Backend",
            description="Desenvolvimento de APIs REST em Python.",
            modality=Modality.REMOTE,
            area_id=areas["Tecnologia"].id,
            location="Remoto",
            weekly_hours=30,
            requirements="Python, SQL, Git",
        ), caller)
        await offer_service.create(JobOfferData(
            title="Estágio UX/UI",
            description="Prototipação e pesquisa com usuários.",
            modality=Modality.HYBRID,
            area_id=areas["Design"].id,
            location="Recife/PE",
            weekly_hours=20,
            requirements="Figma, noções de pesquisa com usuários",
        ), caller)

        # Application
        await ApplicationService(
            SQLAlchemyApplicationRepository(session), offers_repo, identities
        ).create(student.id, backend.id)

    await close_db()

    print("Database seeded successfully!")
    print(f"Areas: {', '.join(AREA_NAMES)}")
    print("Admin:   admin@portal.com / admin123")
    print("Company: rh@techsolutions.com.br / empresa123")
    print("Student: ana.souza@aluno.edu.br / aluna123")


if __name__ == "__main__":
    asyncio.run(seed_database())
