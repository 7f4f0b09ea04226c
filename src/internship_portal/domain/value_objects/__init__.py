"""Value Objects - Immutable objects defined by their attributes"""

from .email import Email
__all__ = ["Email"]
