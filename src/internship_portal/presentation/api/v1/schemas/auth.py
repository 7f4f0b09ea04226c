"""
Authentication Request/Response Schemas
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.application.services.auth.interfaces import AuthenticationResult
from internship_portal.domain.entities import Identity
from .area import AreaResponse


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    password: Optional[str] = Field(None, alias="senha")


class LoginResponse(BaseModel):
    """Token plus the caller's display data"""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field("Bearer", alias="tipo")
    email: str
    role: str
    name: str = Field(alias="nome")
    id: int
    interest_areas: Optional[List[AreaResponse]] = Field(None, alias="areasInteresse")

    @classmethod
    def from_result(cls, result: AuthenticationResult) -> "LoginResponse":
        interest_areas = None
        if result.interest_areas is not None:
            interest_areas = [AreaResponse.from_entity(a) for a in result.interest_areas]
        return cls(
            token=result.token,
            token_type=result.token_type,
            email=result.email,
            role=result.role.value,
            name=result.display_name,
            id=result.entity_id,
            interest_areas=interest_areas,
        )


class MeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    role: str
    name: str = Field(alias="nome")

    @classmethod
    def from_entity(cls, identity: Identity) -> "MeResponse":
        return cls(id=identity.id, email=str(identity.email), role=identity.role.value, name=identity.name)
