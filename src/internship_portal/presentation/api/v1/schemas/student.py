"""
Student Request/Response Schemas
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.domain.entities import Education, Experience, Identity, Skill
from .area import AreaRef, AreaResponse


class EducationSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    institution: Optional[str] = Field(None, alias="instituicao")
    course: Optional[str] = Field(None, alias="curso")
    level: Optional[str] = Field(None, alias="nivel")
    start_date: Optional[date] = Field(None, alias="dataInicio")
    end_date: Optional[date] = Field(None, alias="dataFim")
    in_progress: bool = Field(False, alias="emAndamento")
    description: Optional[str] = Field(None, alias="descricao")

    def to_entity(self) -> Education:
        return Education(
            institution=self.institution,
            course=self.course,
            level=self.level,
            start_date=self.start_date,
            end_date=self.end_date,
            in_progress=self.in_progress,
            description=self.description,
        )

    @classmethod
    def from_entity(cls, item: Education) -> "EducationSchema":
        return cls(
            institution=item.institution,
            course=item.course,
            level=item.level,
            start_date=item.start_date,
            end_date=item.end_date,
            in_progress=item.in_progress,
            description=item.description,
        )


class ExperienceSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company: Optional[str] = Field(None, alias="empresa")
    role_title: Optional[str] = Field(None, alias="cargo")
    start_date: Optional[date] = Field(None, alias="dataInicio")
    end_date: Optional[date] = Field(None, alias="dataFim")
    current: bool = Field(False, alias="atual")
    description: Optional[str] = Field(None, alias="descricao")

    def to_entity(self) -> Experience:
        return Experience(
            company=self.company,
            role_title=self.role_title,
            start_date=self.start_date,
            end_date=self.end_date,
            current=self.current,
            description=self.description,
        )

    @classmethod
    def from_entity(cls, item: Experience) -> "ExperienceSchema":
        return cls(
            company=item.company,
            role_title=item.role_title,
            start_date=item.start_date,
            end_date=item.end_date,
            current=item.current,
            description=item.description,
        )


class SkillSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="nome")
    level: Optional[int] = Field(None, alias="nivel")
    category: Optional[str] = Field(None, alias="categoria")

    def to_entity(self) -> Skill:
        return Skill(name=self.name, level=self.level, category=self.category)

    @classmethod
    def from_entity(cls, item: Skill) -> "SkillSchema":
        return cls(name=item.name, level=item.level, category=item.category)


class StudentRequest(BaseModel):
    """Registration and full-update payload; `role` is never read from the client"""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = None
    password: Optional[str] = Field(None, alias="senha")
    phone: Optional[str] = Field(None, alias="telefone")
    national_id: Optional[str] = Field(None, alias="cpf")
    course: Optional[str] = Field(None, alias="curso")
    birthdate: Optional[date] = Field(None, alias="dataNascimento")
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    bio: Optional[str] = Field(None, alias="resumo")
    education: List[EducationSchema] = Field(default_factory=list, alias="educacao")
    experience: List[ExperienceSchema] = Field(default_factory=list, alias="experiencia")
    skills: List[SkillSchema] = Field(default_factory=list, alias="habilidades")
    interest_areas: List[AreaRef] = Field(default_factory=list, alias="areasInteresse")


class StudentSummary(BaseModel):
    """Student as embedded in applications"""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    email: str
    course: Optional[str] = Field(None, alias="curso")

    @classmethod
    def from_entity(cls, student: Identity) -> "StudentSummary":
        return cls(
            id=student.id,
            name=student.name,
            email=str(student.email),
            course=student.student.course,
        )


class StudentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    email: str
    phone: Optional[str] = Field(None, alias="telefone")
    role: str
    national_id: str = Field(alias="cpf")
    course: Optional[str] = Field(None, alias="curso")
    birthdate: Optional[date] = Field(None, alias="dataNascimento")
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    bio: Optional[str] = Field(None, alias="resumo")
    education: List[EducationSchema] = Field(default_factory=list, alias="educacao")
    experience: List[ExperienceSchema] = Field(default_factory=list, alias="experiencia")
    skills: List[SkillSchema] = Field(default_factory=list, alias="habilidades")
    interest_areas: List[AreaResponse] = Field(default_factory=list, alias="areasInteresse")
    created_at: datetime = Field(alias="dataCriacao")
    updated_at: Optional[datetime] = Field(None, alias="dataAtualizacao")

    @classmethod
    def from_entity(cls, student: Identity) -> "StudentResponse":
        profile = student.student
        return cls(
            id=student.id,
            name=student.name,
            email=str(student.email),
            phone=student.phone,
            role=student.role.value,
            national_id=profile.national_id,
            course=profile.course,
            birthdate=profile.birthdate,
            linkedin=profile.linkedin,
            github=profile.github,
            portfolio=profile.portfolio,
            bio=profile.bio,
            education=[EducationSchema.from_entity(e) for e in profile.education],
            experience=[ExperienceSchema.from_entity(e) for e in profile.experience],
            skills=[SkillSchema.from_entity(s) for s in profile.skills],
            interest_areas=[AreaResponse.from_entity(a) for a in profile.interest_areas],
            created_at=student.created_at,
            updated_at=student.updated_at,
        )
