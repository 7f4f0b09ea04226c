"""
Tests for JWT token issuing and validation
"""
from datetime import datetime, timedelta, timezone

import pytest

from internship_portal.core.exceptions import TokenError
from internship_portal.domain.clock import epoch_seconds, utc_now
from internship_portal.domain.enums import Role
from internship_portal.infrastructure.security.jwt_service import JwtTokenService
from internship_portal.infrastructure.security.password_hasher import BcryptPasswordHasher


SECRET = "unit-test-secret-key-0123456789abcdef"


class MovableClock:
    """Clock the tests can advance"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class TestJwtTokenService:
    """Test token issue/validate/extract"""

    @pytest.fixture
    def clock(self):
        return MovableClock(datetime(2024, 1, 1, 12, 0))

    @pytest.fixture
    def service(self, clock):
        return JwtTokenService(secret_key=SECRET, expire_minutes=60, clock=clock)

    def test_issue_and_validate(self, service):
        token = service.issue("aluno@ufpe.br", Role.STUDENT)

        assert service.validate(token, "aluno@ufpe.br") is True
        assert service.extract_subject(token) == "aluno@ufpe.br"

    def test_claims_carry_role_and_lifetime(self, service, clock):
        token = service.issue("rh@tech.com.br", Role.COMPANY)
        claims = service.extract_claims(token)

        assert claims["sub"] == "rh@tech.com.br"
        assert claims["role"] == "COMPANY"
        assert claims["iat"] == 1704110400  # 2024-01-01T12:00:00Z
        assert claims["exp"] - claims["iat"] == 3600

    def test_validate_rejects_other_subject(self, service):
        token = service.issue("aluno@ufpe.br", Role.STUDENT)
        assert service.validate(token, "outro@ufpe.br") is False

    def test_validate_rejects_expired_token(self, service, clock):
        token = service.issue("aluno@ufpe.br", Role.STUDENT)

        clock.advance(minutes=59)
        assert service.validate(token, "aluno@ufpe.br") is True

        clock.advance(minutes=1)
        assert service.validate(token, "aluno@ufpe.br") is False

    def test_expired_token_still_has_subject(self, service, clock):
        token = service.issue("aluno@ufpe.br", Role.STUDENT)
        clock.advance(days=2)

        assert service.extract_subject(token) == "aluno@ufpe.br"

    def test_tampered_signature_is_rejected(self, service):
        token = service.issue("aluno@ufpe.br", Role.STUDENT)
        header, payload, signature = token.split(".")
        middle = len(signature) // 2
        flipped = "A" if signature[middle] != "A" else "B"
        tampered = ".".join([header, payload, signature[:middle] + flipped + signature[middle + 1:]])

        assert service.validate(tampered, "aluno@ufpe.br") is False
        with pytest.raises(TokenError):
            service.extract_subject(tampered)

    def test_token_signed_with_other_key_is_rejected(self, service):
        other = JwtTokenService(secret_key="another-secret-key-0123456789abcdef")
        token = other.issue("aluno@ufpe.br", Role.STUDENT)

        assert service.validate(token, "aluno@ufpe.br") is False

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
    def test_malformed_token(self, service, garbage):
        assert service.validate(garbage, "aluno@ufpe.br") is False
        with pytest.raises(TokenError):
            service.extract_claims(garbage)


class TestBcryptPasswordHasher:
    """Test password hashing"""

    @pytest.fixture
    def hasher(self):
        return BcryptPasswordHasher()

    def test_hash_and_verify(self, hasher):
        hashed = hasher.hash_password("senha123")

        assert hashed != "senha123"
        assert hasher.verify_password("senha123", hashed) is True
        assert hasher.verify_password("errada", hashed) is False

    def test_unrecognised_hash_does_not_verify(self, hasher):
        assert hasher.verify_password("senha123", "") is False
        assert hasher.verify_password("senha123", "plain-text") is False


class TestClock:
    """Test the shared naive-UTC time source"""

    def test_utc_now_is_naive_utc(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        now = utc_now()

        assert now.tzinfo is None
        assert before <= now <= before + timedelta(seconds=5)

    def test_epoch_seconds_treats_naive_as_utc(self):
        naive = datetime(2024, 1, 1, 12, 0)
        aware = datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3)))

        assert epoch_seconds(naive) == 1704110400
        assert epoch_seconds(aware) == 1704110400
