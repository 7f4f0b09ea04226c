"""
Job Offer Request/Response Schemas
"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.application.services.job_offers import JobOfferStatistics
from internship_portal.domain.entities import JobOffer
from .area import AreaRef, AreaResponse
from .company import CompanySummary


class JobOfferRequest(BaseModel):
    """
    Create/update payload

    A `company` sent by the client is ignored; offers always belong to the
    calling company. `ativa` and the lifecycle dates are server-managed.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, alias="titulo")
    description: Optional[str] = Field(None, alias="descricao")
    location: Optional[str] = Field(None, alias="localizacao")
    modality: Optional[str] = Field(None, alias="modalidade")
    weekly_hours: Optional[int] = Field(None, alias="cargaHoraria")
    requirements: Optional[str] = Field(None, alias="requisitos")
    area: Optional[AreaRef] = None


class JobOfferResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = Field(alias="titulo")
    description: str = Field(alias="descricao")
    location: Optional[str] = Field(None, alias="localizacao")
    modality: str = Field(alias="modalidade")
    weekly_hours: Optional[int] = Field(None, alias="cargaHoraria")
    requirements: Optional[str] = Field(None, alias="requisitos")
    is_active: bool = Field(alias="ativa")
    created_at: datetime = Field(alias="dataCriacao")
    updated_at: Optional[datetime] = Field(None, alias="dataAtualizacao")
    closed_at: Optional[datetime] = Field(None, alias="dataEncerramento")
    company: CompanySummary
    area: AreaResponse

    @classmethod
    def from_entity(cls, offer: JobOffer) -> "JobOfferResponse":
        return cls(
            id=offer.id,
            title=offer.title,
            description=offer.description,
            location=offer.location,
            modality=offer.modality.value,
            weekly_hours=offer.weekly_hours,
            requirements=offer.requirements,
            is_active=offer.is_active,
            created_at=offer.created_at,
            updated_at=offer.updated_at,
            closed_at=offer.closed_at,
            company=CompanySummary.from_entity(offer.company),
            area=AreaResponse.from_entity(offer.area),
        )


class JobOfferStatisticsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    active: int = Field(alias="ativas")
    closed: int = Field(alias="encerradas")
    by_area: Dict[str, int] = Field(default_factory=dict, alias="porArea")

    @classmethod
    def from_statistics(cls, stats: JobOfferStatistics) -> "JobOfferStatisticsResponse":
        return cls(active=stats.active, closed=stats.closed, by_area=dict(stats.by_area))
