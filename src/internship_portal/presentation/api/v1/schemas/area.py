"""
Area Request/Response Schemas
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from internship_portal.domain.entities import Area


class AreaRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="nome")


class AreaRef(BaseModel):
    """Reference to an existing area, e.g. {"id": 1}"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = Field(None, alias="nome")


class AreaResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")

    @classmethod
    def from_entity(cls, area: Area) -> "AreaResponse":
        return cls(id=area.id, name=area.name)
