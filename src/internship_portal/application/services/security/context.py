"""
Caller Context
Per-request view of who is calling, passed explicitly to handlers and services
"""
from dataclasses import dataclass
from typing import Optional

from internship_portal.domain.entities import Identity
from internship_portal.domain.enums import Role


@dataclass(frozen=True)
class CallerContext:
    """Resolved caller; anonymous when identity is None"""

    identity: Optional[Identity] = None

    @classmethod
    def anonymous(cls) -> "CallerContext":
        return cls(identity=None)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def role(self) -> Optional[Role]:
        return self.identity.role if self.identity else None

    def has_role(self, *roles: Role) -> bool:
        return self.identity is not None and self.identity.role in roles

    def __str__(self) -> str:
        if self.identity is None:
            return "anonymous"
        return f"{self.identity.email} ({self.identity.role.value})"
