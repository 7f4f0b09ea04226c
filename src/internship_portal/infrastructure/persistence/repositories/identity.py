"""
Identity Repository Implementation
Users plus their company/student records, stored in joined tables
"""
from typing import List, Optional, Sequence

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from internship_portal.core.exceptions import (
    DomainException,
    DuplicateResourceException,
    RepositoryException,
)
from internship_portal.domain.entities import Identity
from internship_portal.domain.enums import Role
from internship_portal.application.repositories.interfaces import IIdentityRepository
from internship_portal.infrastructure.persistence.models import (
    ApplicationModel,
    AreaModel,
    CompanyModel,
    JobOfferModel,
    StudentModel,
    UserModel,
    company_areas,
    student_areas,
)
from internship_portal.infrastructure.persistence.mappers import (
    company_profile,
    company_to_entity,
    education_to_json,
    experience_to_json,
    skills_to_json,
    student_profile,
    student_to_entity,
    user_to_entity,
)


class SQLAlchemyIdentityRepository(IIdentityRepository):
    """SQLAlchemy implementation of identity repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, identity_id: int) -> Optional[Identity]:
        try:
            model = await self._fetch(UserModel, UserModel.id == identity_id)
            return await self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get identity by ID {identity_id}: {str(e)}")
            raise RepositoryException(f"Failed to get identity: {str(e)}")

    async def get_by_email(self, email: str) -> Optional[Identity]:
        try:
            model = await self._fetch(UserModel, UserModel.email == email)
            return await self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get identity by email {email}: {str(e)}")
            raise RepositoryException(f"Failed to get identity: {str(e)}")

    async def exists_by_email(self, email: str) -> bool:
        return await self._exists(select(UserModel.id).where(UserModel.email == email), email)

    async def get_company(self, company_id: int) -> Optional[Identity]:
        try:
            model = await self._fetch(CompanyModel, CompanyModel.id == company_id)
            return company_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get company {company_id}: {str(e)}")
            raise RepositoryException(f"Failed to get company: {str(e)}")

    async def get_student(self, student_id: int) -> Optional[Identity]:
        try:
            model = await self._fetch(StudentModel, StudentModel.id == student_id)
            return student_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get student {student_id}: {str(e)}")
            raise RepositoryException(f"Failed to get student: {str(e)}")

    async def get_company_by_tax_id(self, tax_id: str) -> Optional[Identity]:
        try:
            model = await self._fetch(CompanyModel, CompanyModel.tax_id == tax_id)
            return company_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get company by CNPJ {tax_id}: {str(e)}")
            raise RepositoryException(f"Failed to get company: {str(e)}")

    async def get_student_by_national_id(self, national_id: str) -> Optional[Identity]:
        try:
            model = await self._fetch(StudentModel, StudentModel.national_id == national_id)
            return student_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get student by CPF {national_id}: {str(e)}")
            raise RepositoryException(f"Failed to get student: {str(e)}")

    async def exists_by_tax_id(self, tax_id: str) -> bool:
        return await self._exists(select(CompanyModel.id).where(CompanyModel.tax_id == tax_id), tax_id)

    async def exists_by_national_id(self, national_id: str) -> bool:
        return await self._exists(
            select(StudentModel.id).where(StudentModel.national_id == national_id), national_id
        )

    async def list_by_role(self, role: Role) -> List[Identity]:
        try:
            if role == Role.COMPANY:
                result = await self.session.execute(select(CompanyModel).order_by(CompanyModel.id))
                return [company_to_entity(m) for m in result.scalars().all()]
            if role == Role.STUDENT:
                result = await self.session.execute(select(StudentModel).order_by(StudentModel.id))
                return [student_to_entity(m) for m in result.scalars().all()]

            result = await self.session.execute(
                select(UserModel).where(UserModel.role == role.value).order_by(UserModel.id)
            )
            return [user_to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list {role.value} identities: {str(e)}")
            raise RepositoryException(f"Failed to list identities: {str(e)}")

    async def count_by_role(self, role: Role) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(UserModel).where(UserModel.role == role.value)
            )
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count {role.value} identities: {str(e)}")
            raise RepositoryException(f"Failed to count identities: {str(e)}")

    async def create(self, identity: Identity) -> Identity:
        """Create user row and, for companies/students, the profile row"""
        try:
            user = UserModel(
                email=str(identity.email),
                password_hash=identity.password_hash,
                role=identity.role.value,
                name=identity.name,
                phone=identity.phone,
                created_at=identity.created_at,
                updated_at=identity.updated_at,
            )
            self.session.add(user)
            await self.session.flush()

            if identity.role == Role.COMPANY:
                company = CompanyModel(id=user.id, user=user)
                await self._apply_company(company, identity)
                self.session.add(company)
            elif identity.role == Role.STUDENT:
                student = StudentModel(id=user.id, user=user)
                await self._apply_student(student, identity)
                self.session.add(student)

            await self.session.flush()
            return await self.get_by_id(user.id)

        except IntegrityError as e:
            logger.warning(f"Duplicate identity {identity.email}: {str(e.orig)}")
            raise DuplicateResourceException("User", "email", str(identity.email))
        except DomainException:
            raise
        except Exception as e:
            logger.error(f"Failed to create identity {identity.email}: {str(e)}")
            raise RepositoryException(f"Failed to create identity: {str(e)}")

    async def update(self, identity: Identity) -> Identity:
        try:
            user = await self._fetch(UserModel, UserModel.id == identity.id)
            if not user:
                raise RepositoryException(f"Identity not found: {identity.id}")

            # Profile rows are loaded first; their refresh also reloads the user row
            if identity.role == Role.COMPANY:
                company = await self._fetch(CompanyModel, CompanyModel.id == identity.id)
                if company is None:
                    raise RepositoryException(f"Company record not found: {identity.id}")
                await self._apply_company(company, identity)
            elif identity.role == Role.STUDENT:
                student = await self._fetch(StudentModel, StudentModel.id == identity.id)
                if student is None:
                    raise RepositoryException(f"Student record not found: {identity.id}")
                await self._apply_student(student, identity)

            # Update fields; role is immutable
            user.email = str(identity.email)
            user.password_hash = identity.password_hash
            user.name = identity.name
            user.phone = identity.phone
            user.updated_at = identity.updated_at

            await self.session.flush()
            return await self.get_by_id(identity.id)

        except IntegrityError as e:
            logger.warning(f"Duplicate identity on update {identity.id}: {str(e.orig)}")
            raise DuplicateResourceException("User", "email", str(identity.email))
        except DomainException:
            raise
        except Exception as e:
            logger.error(f"Failed to update identity {identity.id}: {str(e)}")
            raise RepositoryException(f"Failed to update identity: {str(e)}")

    async def delete(self, identity_id: int) -> bool:
        """Delete the identity together with everything it owns"""
        try:
            user = await self._fetch(UserModel, UserModel.id == identity_id)
            if not user:
                return False

            role = Role(user.role)
            if role == Role.COMPANY:
                offer_ids = select(JobOfferModel.id).where(JobOfferModel.company_id == identity_id)
                await self.session.execute(
                    delete(ApplicationModel).where(ApplicationModel.job_offer_id.in_(offer_ids))
                )
                await self.session.execute(
                    delete(JobOfferModel).where(JobOfferModel.company_id == identity_id)
                )
                await self.session.execute(
                    delete(company_areas).where(company_areas.c.company_id == identity_id)
                )
                await self.session.execute(delete(CompanyModel).where(CompanyModel.id == identity_id))
            elif role == Role.STUDENT:
                await self.session.execute(
                    delete(ApplicationModel).where(ApplicationModel.student_id == identity_id)
                )
                await self.session.execute(
                    delete(student_areas).where(student_areas.c.student_id == identity_id)
                )
                await self.session.execute(delete(StudentModel).where(StudentModel.id == identity_id))

            await self.session.execute(delete(UserModel).where(UserModel.id == identity_id))
            await self.session.flush()
            return True

        except Exception as e:
            logger.error(f"Failed to delete identity {identity_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete identity: {str(e)}")

    async def _fetch(self, model_cls, condition):
        """Single row, refreshed from the database"""
        result = await self.session.execute(
            select(model_cls).where(condition).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _exists(self, query, label: str) -> bool:
        try:
            result = await self.session.execute(query)
            return result.first() is not None

        except Exception as e:
            logger.error(f"Failed to check identity existence {label}: {str(e)}")
            raise RepositoryException(f"Failed to check identity existence: {str(e)}")

    async def _to_entity(self, model: UserModel) -> Identity:
        """Attach the role-specific profile; missing records give profile=None"""
        role = Role(model.role)
        if role == Role.COMPANY:
            company = await self._fetch(CompanyModel, CompanyModel.id == model.id)
            return user_to_entity(model, company_profile(company) if company else None)
        if role == Role.STUDENT:
            student = await self._fetch(StudentModel, StudentModel.id == model.id)
            return user_to_entity(model, student_profile(student) if student else None)
        return user_to_entity(model)

    async def _area_models(self, area_ids: Sequence[int]) -> List[AreaModel]:
        if not area_ids:
            return []
        result = await self.session.execute(select(AreaModel).where(AreaModel.id.in_(list(area_ids))))
        return list(result.scalars().all())

    async def _apply_company(self, model: CompanyModel, identity: Identity) -> None:
        profile = identity.company
        model.tax_id = profile.tax_id
        model.address = profile.address
        model.areas = await self._area_models([a.id for a in profile.practice_areas])

    async def _apply_student(self, model: StudentModel, identity: Identity) -> None:
        profile = identity.student
        model.national_id = profile.national_id
        model.course = profile.course
        model.birthdate = profile.birthdate
        model.linkedin = profile.linkedin
        model.github = profile.github
        model.portfolio = profile.portfolio
        model.bio = profile.bio
        model.education = education_to_json(profile.education)
        model.experience = experience_to_json(profile.experience)
        model.skills = skills_to_json(profile.skills)
        model.interest_areas = await self._area_models([a.id for a in profile.interest_areas])
