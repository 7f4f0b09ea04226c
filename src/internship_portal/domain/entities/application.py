"""
Application Domain Entity
A student's candidacy to a job offer
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..enums import ApplicationStatus
from .identity import Identity
from .job_offer import JobOffer


@dataclass(frozen=True)
class Application:
    """Application domain entity - immutable"""

    id: Optional[int]
    student: Identity
    job_offer: JobOffer
    submitted_at: datetime
    status: ApplicationStatus = ApplicationStatus.PENDING

    def __post_init__(self):
        if self.student.student is None:
            raise ValueError("Application student must be a student identity")

    def with_status(self, status: ApplicationStatus) -> "Application":
        return replace(self, status=status)

    def __str__(self) -> str:
        return f"Application({self.id}, status={self.status.value})"
