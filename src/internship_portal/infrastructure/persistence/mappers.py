"""
ORM <-> domain conversions shared by the repositories
"""
from datetime import date
from typing import Any, Dict, List, Optional

from internship_portal.domain.entities import (
    AdminProfile,
    Application,
    Area,
    CompanyProfile,
    Education,
    Experience,
    Identity,
    JobOffer,
    Skill,
    StudentProfile,
)
from internship_portal.domain.enums import ApplicationStatus, Modality, Role
from internship_portal.domain.value_objects import Email
from .models import (
    AreaModel,
    ApplicationModel,
    CompanyModel,
    JobOfferModel,
    StudentModel,
    UserModel,
)


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def area_to_entity(model: AreaModel) -> Area:
    return Area(id=model.id, name=model.name)


def education_to_json(items) -> List[Dict[str, Any]]:
    return [
        {
            "institution": e.institution,
            "course": e.course,
            "level": e.level,
            "start_date": _format_date(e.start_date),
            "end_date": _format_date(e.end_date),
            "in_progress": e.in_progress,
            "description": e.description,
        }
        for e in items
    ]


def experience_to_json(items) -> List[Dict[str, Any]]:
    return [
        {
            "company": e.company,
            "role_title": e.role_title,
            "start_date": _format_date(e.start_date),
            "end_date": _format_date(e.end_date),
            "current": e.current,
            "description": e.description,
        }
        for e in items
    ]


def skills_to_json(items) -> List[Dict[str, Any]]:
    return [{"name": s.name, "level": s.level, "category": s.category} for s in items]


def _education_from_json(items) -> tuple:
    return tuple(
        Education(
            institution=item["institution"],
            course=item["course"],
            level=item.get("level"),
            start_date=_parse_date(item.get("start_date")),
            end_date=_parse_date(item.get("end_date")),
            in_progress=bool(item.get("in_progress")),
            description=item.get("description"),
        )
        for item in items or []
    )


def _experience_from_json(items) -> tuple:
    return tuple(
        Experience(
            company=item["company"],
            role_title=item["role_title"],
            start_date=_parse_date(item.get("start_date")),
            end_date=_parse_date(item.get("end_date")),
            current=bool(item.get("current")),
            description=item.get("description"),
        )
        for item in items or []
    )


def _skills_from_json(items) -> tuple:
    return tuple(
        Skill(name=item["name"], level=item.get("level"), category=item.get("category"))
        for item in items or []
    )


def company_profile(model: CompanyModel) -> CompanyProfile:
    return CompanyProfile(
        tax_id=model.tax_id,
        address=model.address,
        practice_areas=tuple(area_to_entity(a) for a in model.areas),
    )


def student_profile(model: StudentModel) -> StudentProfile:
    return StudentProfile(
        national_id=model.national_id,
        course=model.course,
        birthdate=model.birthdate,
        linkedin=model.linkedin,
        github=model.github,
        portfolio=model.portfolio,
        bio=model.bio,
        education=_education_from_json(model.education),
        experience=_experience_from_json(model.experience),
        skills=_skills_from_json(model.skills),
        interest_areas=tuple(area_to_entity(a) for a in model.interest_areas),
    )


def user_to_entity(model: UserModel, profile=None) -> Identity:
    role = Role(model.role)
    if profile is None and role == Role.ADMIN:
        profile = AdminProfile()
    return Identity(
        id=model.id,
        name=model.name,
        email=Email(model.email),
        password_hash=model.password_hash,
        role=role,
        profile=profile,
        phone=model.phone,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def company_to_entity(model: CompanyModel) -> Identity:
    return user_to_entity(model.user, company_profile(model))


def student_to_entity(model: StudentModel) -> Identity:
    return user_to_entity(model.user, student_profile(model))


def offer_to_entity(model: JobOfferModel) -> JobOffer:
    return JobOffer(
        id=model.id,
        title=model.title,
        description=model.description,
        location=model.location,
        modality=Modality(model.modality),
        weekly_hours=model.weekly_hours,
        requirements=model.requirements,
        company=company_to_entity(model.company),
        area=area_to_entity(model.area),
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
        closed_at=model.closed_at,
    )


def application_to_entity(model: ApplicationModel) -> Application:
    return Application(
        id=model.id,
        student=student_to_entity(model.student),
        job_offer=offer_to_entity(model.job_offer),
        submitted_at=model.submitted_at,
        status=ApplicationStatus(model.status),
    )
