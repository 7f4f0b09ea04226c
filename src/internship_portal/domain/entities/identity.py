"""
Identity Domain Entity
Shared account payload plus a role-specific profile, selected by `role`
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional, Tuple, Union

from ..clock import utc_now
from ..enums import Role
from ..value_objects import Email
from .area import Area


@dataclass(frozen=True)
class Education:
    """Academic record line"""

    institution: str
    course: str
    level: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    in_progress: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class Experience:
    """Professional experience line"""

    company: str
    role_title: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class Skill:
    """Skill with optional 1..5 proficiency"""

    name: str
    level: Optional[int] = None
    category: Optional[str] = None

    def __post_init__(self):
        if self.level is not None and not 1 <= self.level <= 5:
            raise ValueError(f"Skill level must be between 1 and 5: {self.level}")


@dataclass(frozen=True)
class AdminProfile:
    """Administrators carry no extra data"""


@dataclass(frozen=True)
class CompanyProfile:
    """Company-specific data"""

    tax_id: str
    address: str
    practice_areas: Tuple[Area, ...] = ()


@dataclass(frozen=True)
class StudentProfile:
    """Student-specific data"""

    national_id: str
    course: str
    birthdate: Optional[date] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    bio: Optional[str] = None
    education: Tuple[Education, ...] = ()
    experience: Tuple[Experience, ...] = ()
    skills: Tuple[Skill, ...] = ()
    interest_areas: Tuple[Area, ...] = ()


Profile = Union[AdminProfile, CompanyProfile, StudentProfile]

PROFILE_TYPES = {
    Role.ADMIN: AdminProfile,
    Role.COMPANY: CompanyProfile,
    Role.STUDENT: StudentProfile,
}


@dataclass(frozen=True)
class Identity:
    """
    Account domain entity - immutable

    `profile` is None only when the role-specific record is missing from
    storage; that is a data-integrity fault surfaced by the services.
    """

    id: Optional[int]
    name: str
    email: Email
    password_hash: str
    role: Role
    phone: str
    profile: Optional[Profile] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate the role discriminant against the profile payload"""
        if not self.name or not self.name.strip():
            raise ValueError("Name cannot be empty")
        expected = PROFILE_TYPES[self.role]
        if self.profile is not None and not isinstance(self.profile, expected):
            raise ValueError(
                f"{self.role.value} identity requires {expected.__name__}, "
                f"got {type(self.profile).__name__}"
            )

    @property
    def company(self) -> Optional[CompanyProfile]:
        return self.profile if isinstance(self.profile, CompanyProfile) else None

    @property
    def student(self) -> Optional[StudentProfile]:
        return self.profile if isinstance(self.profile, StudentProfile) else None

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def with_updates(self, **changes) -> "Identity":
        """Copy with changes; role is immutable"""
        if "role" in changes and changes["role"] != self.role:
            raise ValueError("Identity role cannot be changed")
        return replace(self, **changes)

    def __str__(self) -> str:
        return f"Identity({self.id}, {self.email}, role={self.role.value})"
