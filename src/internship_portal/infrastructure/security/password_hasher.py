"""
Password Hasher Implementation
bcrypt through passlib
"""
from passlib.context import CryptContext

from internship_portal.application.services.auth.interfaces import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt password hashing"""

    def __init__(self):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash_password(self, password: str) -> str:
        return self.context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        try:
            return self.context.verify(plain_password, hashed_password)
        except ValueError:
            # Stored value is not a recognised hash
            return False
