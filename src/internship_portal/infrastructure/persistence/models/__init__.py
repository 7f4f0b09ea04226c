"""ORM models - importing this package registers every table on Base.metadata"""

from .area import AreaModel
from .identity import UserModel, CompanyModel, StudentModel, company_areas, student_areas
from .job_offer import JobOfferModel
from .application import ApplicationModel
__all__ = [
    "AreaModel",
    "UserModel",
    "CompanyModel",
    "StudentModel",
    "company_areas",
    "student_areas",
    "JobOfferModel",
    "ApplicationModel",
]
