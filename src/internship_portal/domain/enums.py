"""
Domain Enums
Business enumerations for the portal. Values are the wire/storage names.
"""
from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    """Fixed caller roles"""
    ADMIN = "ADMIN"
    COMPANY = "COMPANY"
    STUDENT = "STUDENT"


class Modality(str, Enum):
    """Where the internship happens"""
    ON_SITE = "PRESENCIAL"
    REMOTE = "REMOTO"
    HYBRID = "HIBRIDO"


class ApplicationStatus(str, Enum):
    """Application progress"""
    PENDING = "PENDENTE"
    UNDER_REVIEW = "EM_ANALISE"
    APPROVED = "APROVADO"
    REJECTED = "REJEITADO"

    def can_transition_to(self, target: "ApplicationStatus") -> bool:
        """Whether the move follows the review flow"""
        return target in APPLICATION_TRANSITIONS[self]


APPLICATION_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.APPROVED,
        ApplicationStatus.REJECTED,
    }),
    ApplicationStatus.UNDER_REVIEW: frozenset({
        ApplicationStatus.APPROVED,
        ApplicationStatus.REJECTED,
    }),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


# Display labels for skill proficiency (1..5)
SKILL_LEVEL_LABELS: Dict[int, str] = {
    1: "Básico",
    2: "Intermediário Baixo",
    3: "Intermediário",
    4: "Intermediário Alto",
    5: "Avançado",
}
