"""
Student Service
Student self-registration, profile management and resume export
"""
import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Optional

from loguru import logger

from internship_portal.core.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from internship_portal.domain.clock import utc_now
from internship_portal.domain.entities import (
    Education,
    Experience,
    Identity,
    Skill,
    StudentProfile,
)
from internship_portal.domain.enums import Role
from internship_portal.domain.value_objects import Email
from internship_portal.application.repositories.interfaces import (
    IAreaRepository,
    IIdentityRepository,
)
from .auth.interfaces import IPasswordHasher
from .areas import resolve_areas
from .resume.interfaces import IResumeRenderer


@dataclass(frozen=True)
class StudentData:
    name: str
    email: str
    national_id: str
    phone: str
    course: str
    password: Optional[str] = None
    birthdate: Optional[date] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    bio: Optional[str] = None
    education: List[Education] = field(default_factory=list)
    experience: List[Experience] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    interest_area_ids: List[int] = field(default_factory=list)


class StudentService:

    def __init__(
        self,
        identity_repository: IIdentityRepository,
        area_repository: IAreaRepository,
        password_hasher: IPasswordHasher,
        resume_renderer: IResumeRenderer,
        clock: Callable[[], datetime] = utc_now
    ):
        self.identity_repo = identity_repository
        self.area_repo = area_repository
        self.password_hasher = password_hasher
        self.resume_renderer = resume_renderer
        self.clock = clock

    async def list_all(self) -> List[Identity]:
        return await self.identity_repo.list_by_role(Role.STUDENT)

    async def get(self, student_id: int) -> Identity:
        student = await self.identity_repo.get_student(student_id)
        if student is None:
            raise ResourceNotFoundException("Student", student_id)
        return student

    async def get_by_national_id(self, national_id: str) -> Identity:
        student = await self.identity_repo.get_student_by_national_id(national_id)
        if student is None:
            raise ResourceNotFoundException("Student", national_id)
        return student

    async def register(self, data: StudentData) -> Identity:
        """Create a student account; the role is always STUDENT"""
        if not data.password:
            raise ValidationException.single("senha", "Password is required")
        if await self.identity_repo.exists_by_email(data.email):
            raise DuplicateResourceException("User", "email", data.email)
        if await self.identity_repo.exists_by_national_id(data.national_id):
            raise DuplicateResourceException("Student", "cpf", data.national_id)

        now = self.clock()
        student = Identity(
            id=None,
            name=data.name.strip(),
            email=Email(data.email),
            password_hash=self.password_hasher.hash_password(data.password),
            role=Role.STUDENT,
            phone=data.phone,
            profile=await self._build_profile(data),
            created_at=now,
            updated_at=now,
        )
        created = await self.identity_repo.create(student)
        logger.info(f"Student registered: {created.email} ({created.id})")
        return created

    async def update(self, student_id: int, data: StudentData) -> Identity:
        """Overwrite the whole profile; the password is kept unless supplied"""
        current = await self.get(student_id)

        if data.email != str(current.email) and await self.identity_repo.exists_by_email(data.email):
            raise DuplicateResourceException("User", "email", data.email)
        if (
            data.national_id != current.student.national_id
            and await self.identity_repo.exists_by_national_id(data.national_id)
        ):
            raise DuplicateResourceException("Student", "cpf", data.national_id)

        password_hash = current.password_hash
        if data.password:
            password_hash = self.password_hasher.hash_password(data.password)

        updated = current.with_updates(
            name=data.name.strip(),
            email=Email(data.email),
            password_hash=password_hash,
            phone=data.phone,
            profile=await self._build_profile(data),
            updated_at=self.clock(),
        )
        return await self.identity_repo.update(updated)

    async def delete(self, student_id: int) -> None:
        await self.get(student_id)
        await self.identity_repo.delete(student_id)
        logger.info(f"Student {student_id} deleted with their applications")

    async def render_resume(self, student_id: int) -> bytes:
        """PDF resume for the student; reportlab runs in a worker thread"""
        student = await self.get(student_id)
        return await asyncio.to_thread(self.resume_renderer.render, student)

    async def _build_profile(self, data: StudentData) -> StudentProfile:
        return StudentProfile(
            national_id=data.national_id,
            course=data.course,
            birthdate=data.birthdate,
            linkedin=data.linkedin,
            github=data.github,
            portfolio=data.portfolio,
            bio=data.bio,
            education=tuple(data.education),
            experience=tuple(data.experience),
            skills=tuple(data.skills),
            interest_areas=await resolve_areas(self.area_repo, data.interest_area_ids),
        )
