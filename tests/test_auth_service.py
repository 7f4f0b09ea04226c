"""
Tests for login: credential check and result assembly
"""
import pytest
from unittest.mock import AsyncMock, Mock

from internship_portal.application.services.auth.impl import AuthenticationManager, AuthService
from internship_portal.core.exceptions import (
    AuthenticationException,
    InvalidCredentialsException,
    ProfileNotFoundException,
)
from internship_portal.domain.enums import Role


class TestAuthenticationManager:
    """Test credential verification"""

    @pytest.fixture
    def identity_repo(self):
        return AsyncMock()

    @pytest.fixture
    def hasher(self):
        return Mock()

    @pytest.fixture
    def manager(self, identity_repo, hasher):
        return AuthenticationManager(identity_repo, hasher)

    @pytest.mark.asyncio
    async def test_valid_credentials(self, manager, identity_repo, hasher, student):
        identity_repo.get_by_email.return_value = student
        hasher.verify_password.return_value = True

        result = await manager.authenticate("  ana@aluno.edu.br ", "senha123")

        assert result is student
        identity_repo.get_by_email.assert_awaited_once_with("ana@aluno.edu.br")
        hasher.verify_password.assert_called_once_with("senha123", "hashed")

    @pytest.mark.asyncio
    async def test_unknown_email(self, manager, identity_repo):
        identity_repo.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsException):
            await manager.authenticate("ninguem@x.com", "senha123")

    @pytest.mark.asyncio
    async def test_wrong_password_has_same_error(self, manager, identity_repo, hasher, student):
        identity_repo.get_by_email.return_value = student
        hasher.verify_password.return_value = False

        with pytest.raises(InvalidCredentialsException) as exc_info:
            await manager.authenticate("ana@aluno.edu.br", "errada")

        assert str(exc_info.value) == "Invalid email or password"


class TestAuthService:
    """Test token issue and profile lookup on login"""

    @pytest.fixture
    def identity_repo(self):
        return AsyncMock()

    @pytest.fixture
    def manager(self):
        return AsyncMock()

    @pytest.fixture
    def token_service(self):
        service = Mock()
        service.issue.return_value = "signed.jwt.token"
        return service

    @pytest.fixture
    def auth_service(self, manager, token_service, identity_repo):
        return AuthService(manager, token_service, identity_repo)

    @pytest.mark.asyncio
    async def test_student_login_includes_interest_areas(
        self, auth_service, manager, token_service, identity_repo, student, area
    ):
        manager.authenticate.return_value = student
        identity_repo.get_student.return_value = student

        result = await auth_service.authenticate("ana@aluno.edu.br", "senha123")

        token_service.issue.assert_called_once_with("ana@aluno.edu.br", Role.STUDENT)
        assert result.token == "signed.jwt.token"
        assert result.token_type == "Bearer"
        assert result.role == Role.STUDENT
        assert result.display_name == "Ana Souza"
        assert result.entity_id == 20
        assert result.interest_areas == (area,)

    @pytest.mark.asyncio
    async def test_company_login_has_no_interest_areas(self, auth_service, manager, identity_repo, company):
        manager.authenticate.return_value = company
        identity_repo.get_company.return_value = company

        result = await auth_service.authenticate("rh@tech.com.br", "senha123")

        assert result.role == Role.COMPANY
        assert result.entity_id == 10
        assert result.display_name == "Tech Ltda"
        assert result.interest_areas is None

    @pytest.mark.asyncio
    async def test_admin_login_uses_identity(self, auth_service, manager, identity_repo, admin):
        manager.authenticate.return_value = admin

        result = await auth_service.authenticate("admin@portal.com", "senha123")

        assert result.role == Role.ADMIN
        assert result.entity_id == 1
        identity_repo.get_company.assert_not_called()
        identity_repo.get_student.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_profile_record(self, auth_service, manager, identity_repo, company):
        manager.authenticate.return_value = company
        identity_repo.get_company.return_value = None

        with pytest.raises(ProfileNotFoundException) as exc_info:
            await auth_service.authenticate("rh@tech.com.br", "senha123")

        assert isinstance(exc_info.value, AuthenticationException)

    @pytest.mark.asyncio
    async def test_invalid_credentials_propagate(self, auth_service, manager, token_service):
        manager.authenticate.side_effect = InvalidCredentialsException()

        with pytest.raises(InvalidCredentialsException):
            await auth_service.authenticate("rh@tech.com.br", "errada")

        token_service.issue.assert_not_called()
