"""
Job Offer Domain Entity
Internship posting owned by a company
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from ..clock import utc_now
from ..enums import Modality
from .area import Area
from .identity import Identity


@dataclass(frozen=True)
class JobOffer:
    """Job offer domain entity - immutable"""

    id: Optional[int]
    title: str
    description: str
    location: str
    modality: Modality
    weekly_hours: int
    requirements: str
    company: Identity
    area: Area

    # Lifecycle
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate offer data"""
        if not self.title or not self.title.strip():
            raise ValueError("Title cannot be empty")
        if self.company.company is None:
            raise ValueError("Job offer company must be a company identity")
        if self.is_active != (self.closed_at is None):
            raise ValueError("closed_at must be set exactly when the offer is inactive")

    def close(self, now: datetime) -> "JobOffer":
        """ACTIVE -> CLOSED"""
        return replace(self, is_active=False, closed_at=now)

    def __str__(self) -> str:
        state = "active" if self.is_active else "closed"
        return f"JobOffer({self.id}, {self.title!r}, {state})"
