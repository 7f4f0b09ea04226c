"""Domain Entities - Core business objects"""

from .area import Area
from .identity import (
    Identity,
    AdminProfile,
    CompanyProfile,
    StudentProfile,
    Education,
    Experience,
    Skill,
)
from .job_offer import JobOffer
from .application import Application
__all__ = [
    "Area",
    "Identity",
    "AdminProfile",
    "CompanyProfile",
    "StudentProfile",
    "Education",
    "Experience",
    "Skill",
    "JobOffer",
    "Application",
]
