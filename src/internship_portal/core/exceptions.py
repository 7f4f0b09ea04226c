"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""
from dataclasses import dataclass
from typing import List, Optional


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class InvalidCredentialsException(AuthenticationException):
    """Unknown email or wrong password"""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ProfileNotFoundException(AuthenticationException):
    """Identity exists but its company/student record is missing"""

    def __init__(self, role: str, identity_id: int):
        self.role = role
        self.identity_id = identity_id
        super().__init__(f"{role} profile not found for identity {identity_id}")


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class TokenError(DomainException):
    """Bearer token could not be parsed or verified"""
    pass


@dataclass(frozen=True)
class FieldError:
    """Single field-level validation failure"""

    field: str
    message: str


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationException":
        return cls([FieldError(field, message)])


class InvalidStateException(DomainException):
    """Operation not allowed in the resource's current state"""
    pass


class RepositoryException(DomainException):
    """Database operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DuplicateResourceException(DomainException):
    """Resource already exists"""

    def __init__(self, resource_type: str, field: str, value: Optional[str]):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(f"{resource_type} with {field}='{value}' already exists")


class ResumeRenderingException(DomainException):
    """PDF resume could not be produced"""
    pass
