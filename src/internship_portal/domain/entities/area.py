"""
Area Domain Entity
Tag shared by company practice areas, student interests and job offers
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Area:
    """Area of practice/interest - immutable"""

    id: Optional[int]
    name: str

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Area name cannot be empty")

    def __str__(self) -> str:
        return self.name
