"""
JWT Service Implementation
HS256 bearer tokens carrying the subject email and role claim
"""
from datetime import datetime, timedelta
from typing import Callable, Optional

from jose import jwt, JWTError
from loguru import logger

from internship_portal.core.config import settings
from internship_portal.core.exceptions import TokenError
from internship_portal.domain.clock import epoch_seconds, utc_now
from internship_portal.domain.enums import Role
from internship_portal.application.services.auth.interfaces import ITokenService


class JwtTokenService(ITokenService):
    """
    Stateless token service

    Expiry is checked against the injected clock rather than the library's
    wall-clock check, so tests can move time explicitly.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.expires_delta = timedelta(
            minutes=expire_minutes if expire_minutes is not None else settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        )
        self.clock = clock

        if secret_key is None and settings.uses_default_jwt_secret:
            logger.warning("Using the built-in JWT secret key. Set JWT_SECRET_KEY in production!")

    def issue(self, subject_email: str, role: Role) -> str:
        """Create access token"""
        now = self.clock()
        payload = {
            "sub": subject_email,
            "role": role.value,
            "iat": epoch_seconds(now),
            "exp": epoch_seconds(now + self.expires_delta),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def extract_claims(self, token: str) -> dict:
        """Verify the signature and return the claims, ignoring expiry"""
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise TokenError(f"Invalid token: {str(e)}")

    def extract_subject(self, token: str) -> str:
        subject = self.extract_claims(token).get("sub")
        if not subject:
            raise TokenError("Token has no subject")
        return subject

    def validate(self, token: str, expected_subject: str) -> bool:
        try:
            claims = self.extract_claims(token)
        except TokenError as e:
            logger.debug(f"JWT verification failed: {str(e)}")
            return False

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return False
        if epoch_seconds(self.clock()) >= exp:
            logger.debug(f"JWT expired for {claims.get('sub')}")
            return False

        return claims.get("sub") == expected_subject
