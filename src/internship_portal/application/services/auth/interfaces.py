"""
Authentication Service Interfaces
Abstract base classes for authentication services
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from internship_portal.domain.entities import Area, Identity
from internship_portal.domain.enums import Role


class IPasswordHasher(ABC):
    """Password hashing interface"""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Hash a plain password"""
        pass

    @abstractmethod
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        pass


class ITokenService(ABC):
    """Signed bearer token service interface"""

    @abstractmethod
    def issue(self, subject_email: str, role: Role) -> str:
        """Create a signed, time-limited token for the subject"""
        pass

    @abstractmethod
    def validate(self, token: str, expected_subject: str) -> bool:
        """True only for an intact, unexpired token issued to expected_subject"""
        pass

    @abstractmethod
    def extract_subject(self, token: str) -> str:
        """Subject claim; raises TokenError if the token cannot be parsed"""
        pass

    @abstractmethod
    def extract_claims(self, token: str) -> dict:
        """All claims; raises TokenError if the token cannot be parsed"""
        pass


class IAuthenticationManager(ABC):
    """Verifies email/password pairs against stored credentials"""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> Identity:
        """
        Raises:
            InvalidCredentialsException: unknown email or password mismatch
        """
        pass


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a successful login"""

    token: str
    email: str
    role: Role
    display_name: str
    entity_id: int
    interest_areas: Optional[Tuple[Area, ...]] = None
    token_type: str = "Bearer"


class IAuthService(ABC):
    """Authentication gate interface"""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> AuthenticationResult:
        """
        Verify credentials, mint a token and resolve the caller's profile

        Raises:
            InvalidCredentialsException: bad credentials
            ProfileNotFoundException: company/student record missing
        """
        pass
