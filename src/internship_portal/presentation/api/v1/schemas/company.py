"""
Company Request/Response Schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.domain.entities import Identity
from .area import AreaRef, AreaResponse


class CompanyRequest(BaseModel):
    """Registration and full-update payload; `role` is never read from the client"""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = None
    password: Optional[str] = Field(None, alias="senha")
    phone: Optional[str] = Field(None, alias="telefone")
    tax_id: Optional[str] = Field(None, alias="cnpj")
    address: Optional[str] = Field(None, alias="endereco")
    practice_areas: List[AreaRef] = Field(default_factory=list, alias="areasAtuacao")


class CompanySummary(BaseModel):
    """Company as embedded in job offers"""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    email: str
    tax_id: str = Field(alias="cnpj")
    address: Optional[str] = Field(None, alias="endereco")

    @classmethod
    def from_entity(cls, company: Identity) -> "CompanySummary":
        return cls(
            id=company.id,
            name=company.name,
            email=str(company.email),
            tax_id=company.company.tax_id,
            address=company.company.address,
        )


class CompanyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    email: str
    phone: Optional[str] = Field(None, alias="telefone")
    role: str
    tax_id: str = Field(alias="cnpj")
    address: Optional[str] = Field(None, alias="endereco")
    practice_areas: List[AreaResponse] = Field(default_factory=list, alias="areasAtuacao")
    created_at: datetime = Field(alias="dataCriacao")
    updated_at: Optional[datetime] = Field(None, alias="dataAtualizacao")

    @classmethod
    def from_entity(cls, company: Identity) -> "CompanyResponse":
        profile = company.company
        return cls(
            id=company.id,
            name=company.name,
            email=str(company.email),
            phone=company.phone,
            role=company.role.value,
            tax_id=profile.tax_id,
            address=profile.address,
            practice_areas=[AreaResponse.from_entity(a) for a in profile.practice_areas],
            created_at=company.created_at,
            updated_at=company.updated_at,
        )
