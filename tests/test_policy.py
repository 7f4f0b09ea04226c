"""
Tests for the route authorization policy
"""
import pytest

from internship_portal.application.services.security.context import CallerContext
from internship_portal.application.services.security.policy import (
    AccessRequirement,
    AuthorizationPolicy,
    PolicyDecision,
    PolicyRule,
    RequirementKind,
    evaluate,
    rule,
)
from internship_portal.domain.enums import Role


ANON = None


def caller_for(role, admin, company, student) -> CallerContext:
    identities = {Role.ADMIN: admin, Role.COMPANY: company, Role.STUDENT: student}
    if role is ANON:
        return CallerContext.anonymous()
    return CallerContext(identity=identities[role])


class TestPolicyRule:

    def test_wildcard_matches_base_and_descendants(self):
        policy_rule = rule(["GET"], "/areas/**", AccessRequirement.public())

        assert policy_rule.matches("GET", "/areas")
        assert policy_rule.matches("get", "/areas/3")
        assert policy_rule.matches("GET", "/areas/3/anything")
        assert not policy_rule.matches("GET", "/areasx")
        assert not policy_rule.matches("POST", "/areas")

    def test_exact_pattern(self):
        policy_rule = rule(["POST"], "/companies", AccessRequirement.public())

        assert policy_rule.matches("POST", "/companies")
        assert not policy_rule.matches("POST", "/companies/1")

    def test_empty_methods_match_any(self):
        policy_rule = PolicyRule(frozenset(), "/auth/**", AccessRequirement.public())

        for method in ("GET", "POST", "PUT", "PATCH", "DELETE"):
            assert policy_rule.matches(method, "/auth/login")

    def test_any_of_requires_roles(self):
        with pytest.raises(ValueError):
            AccessRequirement.any_of()


class TestDefaultPolicy:
    """Every row of the route table"""

    @pytest.fixture
    def policy(self):
        return AuthorizationPolicy()

    @pytest.mark.parametrize("method,path,kind,roles", [
        ("POST", "/auth/login", RequirementKind.PUBLIC, set()),
        ("GET", "/auth/me", RequirementKind.PUBLIC, set()),
        ("GET", "/areas", RequirementKind.PUBLIC, set()),
        ("GET", "/areas/4", RequirementKind.PUBLIC, set()),
        ("POST", "/areas", RequirementKind.ROLES, {Role.ADMIN}),
        ("PUT", "/areas/4", RequirementKind.ROLES, {Role.ADMIN}),
        ("DELETE", "/areas/4", RequirementKind.ROLES, {Role.ADMIN}),
        ("GET", "/companies/cnpj/12.345.678/0001-99", RequirementKind.PUBLIC, set()),
        ("POST", "/companies", RequirementKind.PUBLIC, set()),
        ("PUT", "/companies/3", RequirementKind.ROLES, {Role.ADMIN, Role.COMPANY}),
        ("DELETE", "/companies/3", RequirementKind.ROLES, {Role.ADMIN}),
        ("GET", "/students/5/resume", RequirementKind.PUBLIC, set()),
        ("POST", "/students", RequirementKind.PUBLIC, set()),
        ("PUT", "/students/5", RequirementKind.AUTHENTICATED_ANY, set()),
        ("DELETE", "/students/5", RequirementKind.ROLES, {Role.ADMIN}),
        ("GET", "/job-offers/ativas", RequirementKind.PUBLIC, set()),
        ("POST", "/job-offers", RequirementKind.ROLES, {Role.COMPANY}),
        ("PUT", "/job-offers/7", RequirementKind.ROLES, {Role.COMPANY}),
        ("PATCH", "/job-offers/7/encerrar", RequirementKind.ROLES, {Role.COMPANY}),
        ("DELETE", "/job-offers/7", RequirementKind.ROLES, {Role.ADMIN, Role.COMPANY}),
        ("GET", "/applications", RequirementKind.ROLES, {Role.ADMIN, Role.COMPANY}),
        ("GET", "/applications/student/5", RequirementKind.ROLES, {Role.ADMIN, Role.STUDENT}),
        ("GET", "/applications/student/5/count", RequirementKind.ROLES, {Role.ADMIN, Role.STUDENT}),
        ("GET", "/applications/job-offer/7", RequirementKind.ROLES, {Role.ADMIN, Role.COMPANY}),
        ("POST", "/applications", RequirementKind.ROLES, {Role.STUDENT}),
        ("PATCH", "/applications/9/status", RequirementKind.ROLES, {Role.COMPANY}),
        ("DELETE", "/applications/9", RequirementKind.ROLES, {Role.ADMIN, Role.STUDENT}),
    ])
    def test_route_table(self, policy, method, path, kind, roles):
        requirement = policy.requirement_for(method, path)

        assert requirement.kind == kind
        assert set(requirement.roles) == roles

    @pytest.mark.parametrize("method,path", [
        ("GET", "/applications/9"),
        ("GET", "/applications/exists"),
        ("GET", "/admin/dashboard"),
        ("POST", "/companies/3"),
        ("GET", "/unknown"),
    ])
    def test_unlisted_routes_require_authentication(self, policy, method, path):
        assert policy.requirement_for(method, path).kind == RequirementKind.AUTHENTICATED_ANY

    def test_singular_application_path_is_an_alias(self, policy):
        assert policy.requirement_for("POST", "/application") == policy.requirement_for("POST", "/applications")
        assert policy.requirement_for("GET", "/application/student/3").roles == frozenset(
            {Role.ADMIN, Role.STUDENT}
        )

    def test_trailing_slash_is_ignored(self, policy):
        assert policy.requirement_for("POST", "/job-offers/").roles == frozenset({Role.COMPANY})

    def test_first_match_wins(self):
        policy = AuthorizationPolicy(rules=[
            rule(["GET"], "/things/**", AccessRequirement.public()),
            rule(["GET"], "/things/secret", AccessRequirement.any_of(Role.ADMIN)),
        ])
        assert policy.requirement_for("GET", "/things/secret").kind == RequirementKind.PUBLIC


class TestDecisions:

    @pytest.fixture
    def policy(self):
        return AuthorizationPolicy()

    @pytest.mark.parametrize("role,expected", [
        (ANON, PolicyDecision.UNAUTHENTICATED),
        (Role.STUDENT, PolicyDecision.FORBIDDEN),
        (Role.ADMIN, PolicyDecision.FORBIDDEN),
        (Role.COMPANY, PolicyDecision.ALLOW),
    ])
    def test_create_job_offer(self, policy, admin, company, student, role, expected):
        caller = caller_for(role, admin, company, student)
        assert policy.decide("POST", "/job-offers", caller) == expected

    def test_public_route_allows_anonymous(self, policy):
        assert policy.decide("GET", "/job-offers", CallerContext.anonymous()) == PolicyDecision.ALLOW

    def test_authenticated_any_allows_every_role(self, admin, company, student):
        requirement = AccessRequirement.authenticated()
        for identity in (admin, company, student):
            assert evaluate(requirement, CallerContext(identity=identity)) == PolicyDecision.ALLOW
        assert evaluate(requirement, CallerContext.anonymous()) == PolicyDecision.UNAUTHENTICATED
