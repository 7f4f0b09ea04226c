"""
Application Request/Response Schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.domain.entities import Application
from .job_offer import JobOfferResponse
from .student import StudentSummary


class EntityRef(BaseModel):
    id: Optional[int] = None


class ApplicationRequest(BaseModel):
    """
    New application

    `status` and `dataInscricao` are accepted for compatibility but always
    replaced by server values. When `student` is omitted the calling
    student applies.
    """

    model_config = ConfigDict(populate_by_name=True)

    student: Optional[EntityRef] = None
    job_offer: Optional[EntityRef] = Field(None, alias="jobOffer")
    status: Optional[str] = None
    submitted_at: Optional[datetime] = Field(None, alias="dataInscricao")


class ApplicationStatusRequest(BaseModel):
    status: Optional[str] = None


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    student: StudentSummary
    job_offer: JobOfferResponse = Field(alias="jobOffer")
    submitted_at: datetime = Field(alias="dataInscricao")
    status: str

    @classmethod
    def from_entity(cls, application: Application) -> "ApplicationResponse":
        return cls(
            id=application.id,
            student=StudentSummary.from_entity(application.student),
            job_offer=JobOfferResponse.from_entity(application.job_offer),
            submitted_at=application.submitted_at,
            status=application.status.value,
        )


class CountResponse(BaseModel):
    total: int


class ExistsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    exists: bool = Field(alias="existe")
