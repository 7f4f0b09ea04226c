"""
Admin Request/Response Schemas
"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.application.services.admin import DashboardSummary
from internship_portal.domain.entities import Identity


class AdminCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = None
    password: Optional[str] = Field(None, alias="senha")
    phone: Optional[str] = Field(None, alias="telefone")


class AdminResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    email: str
    phone: Optional[str] = Field(None, alias="telefone")
    role: str
    created_at: datetime = Field(alias="dataCriacao")

    @classmethod
    def from_entity(cls, admin: Identity) -> "AdminResponse":
        return cls(
            id=admin.id,
            name=admin.name,
            email=str(admin.email),
            phone=admin.phone,
            role=admin.role.value,
            created_at=admin.created_at,
        )


class DashboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_companies: int = Field(alias="totalEmpresas")
    total_students: int = Field(alias="totalEstudantes")
    open_offers: int = Field(alias="vagasAbertas")
    closed_offers: int = Field(alias="vagasEncerradas")
    offers_by_area: Dict[str, int] = Field(default_factory=dict, alias="vagasPorArea")

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> "DashboardResponse":
        return cls(
            total_companies=summary.total_companies,
            total_students=summary.total_students,
            open_offers=summary.open_offers,
            closed_offers=summary.closed_offers,
            offers_by_area=dict(summary.offers_by_area),
        )
