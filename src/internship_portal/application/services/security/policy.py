"""
Authorization Policy
Ordered (method, route pattern) -> requirement table, first match wins
"""
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from internship_portal.domain.enums import Role
from .context import CallerContext


class RequirementKind(str, Enum):
    PUBLIC = "PUBLIC"
    AUTHENTICATED_ANY = "AUTHENTICATED_ANY"
    ROLES = "ROLES"


@dataclass(frozen=True)
class AccessRequirement:
    """What a caller needs to reach a route"""

    kind: RequirementKind
    roles: FrozenSet[Role] = frozenset()

    @classmethod
    def public(cls) -> "AccessRequirement":
        return cls(RequirementKind.PUBLIC)

    @classmethod
    def authenticated(cls) -> "AccessRequirement":
        return cls(RequirementKind.AUTHENTICATED_ANY)

    @classmethod
    def any_of(cls, *roles: Role) -> "AccessRequirement":
        if not roles:
            raise ValueError("At least one role is required")
        return cls(RequirementKind.ROLES, frozenset(roles))

    def __str__(self) -> str:
        if self.kind == RequirementKind.ROLES:
            return " | ".join(sorted(role.value for role in self.roles))
        return self.kind.value


class PolicyDecision(str, Enum):
    ALLOW = "ALLOW"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"


ANY_METHOD: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class PolicyRule:
    """
    One row of the policy table

    `pattern` ending in "/**" matches the base path and everything below it;
    any other pattern must match the whole path.
    """

    methods: FrozenSet[str]
    pattern: str
    requirement: AccessRequirement

    def matches(self, method: str, path: str) -> bool:
        if self.methods and method.upper() not in self.methods:
            return False
        if self.pattern.endswith("/**"):
            base = self.pattern[:-3]
            return path == base or path.startswith(base + "/")
        return path == self.pattern


def rule(methods: Iterable[str], pattern: str, requirement: AccessRequirement) -> PolicyRule:
    return PolicyRule(frozenset(m.upper() for m in methods), pattern, requirement)


PUBLIC = AccessRequirement.public()
AUTHENTICATED = AccessRequirement.authenticated()
ADMIN = AccessRequirement.any_of(Role.ADMIN)
COMPANY = AccessRequirement.any_of(Role.COMPANY)
STUDENT = AccessRequirement.any_of(Role.STUDENT)
ADMIN_OR_COMPANY = AccessRequirement.any_of(Role.ADMIN, Role.COMPANY)
ADMIN_OR_STUDENT = AccessRequirement.any_of(Role.ADMIN, Role.STUDENT)

# Paths are relative to the API prefix
DEFAULT_RULES: Tuple[PolicyRule, ...] = (
    rule(ANY_METHOD, "/auth/**", PUBLIC),

    rule(["GET"], "/areas/**", PUBLIC),
    rule(["POST"], "/areas", ADMIN),
    rule(["PUT"], "/areas/**", ADMIN),
    rule(["DELETE"], "/areas/**", ADMIN),

    rule(["GET"], "/companies/**", PUBLIC),
    rule(["POST"], "/companies", PUBLIC),
    rule(["PUT"], "/companies/**", ADMIN_OR_COMPANY),
    rule(["DELETE"], "/companies/**", ADMIN),

    rule(["GET"], "/students/**", PUBLIC),
    rule(["POST"], "/students", PUBLIC),
    rule(["PUT"], "/students/**", AUTHENTICATED),
    rule(["DELETE"], "/students/**", ADMIN),

    rule(["GET"], "/job-offers/**", PUBLIC),
    rule(["POST"], "/job-offers", COMPANY),
    rule(["PUT"], "/job-offers/**", COMPANY),
    rule(["PATCH"], "/job-offers/**", COMPANY),
    rule(["DELETE"], "/job-offers/**", ADMIN_OR_COMPANY),

    rule(["GET"], "/applications", ADMIN_OR_COMPANY),
    rule(["GET"], "/applications/student/**", ADMIN_OR_STUDENT),
    rule(["GET"], "/applications/job-offer/**", ADMIN_OR_COMPANY),
    rule(["POST"], "/applications", STUDENT),
    rule(["PATCH"], "/applications/**", COMPANY),
    rule(["DELETE"], "/applications/**", ADMIN_OR_STUDENT),
)

# The applications router is also mounted under its singular legacy path
PATH_ALIASES = {
    "/application": "/applications",
}


class AuthorizationPolicy:
    """Evaluates the rule table for a request"""

    def __init__(
        self,
        rules: Sequence[PolicyRule] = DEFAULT_RULES,
        default: AccessRequirement = AUTHENTICATED
    ):
        self.rules = tuple(rules)
        self.default = default

    @staticmethod
    def normalize_path(path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        if len(path) > 1:
            path = path.rstrip("/")
        for alias, canonical in PATH_ALIASES.items():
            if path == alias or path.startswith(alias + "/"):
                return canonical + path[len(alias):]
        return path

    def match(self, method: str, path: str) -> Optional[PolicyRule]:
        normalized = self.normalize_path(path)
        for policy_rule in self.rules:
            if policy_rule.matches(method, normalized):
                return policy_rule
        return None

    def requirement_for(self, method: str, path: str) -> AccessRequirement:
        matched = self.match(method, path)
        return matched.requirement if matched else self.default

    def decide(self, method: str, path: str, caller: CallerContext) -> PolicyDecision:
        requirement = self.requirement_for(method, path)
        return evaluate(requirement, caller)


def evaluate(requirement: AccessRequirement, caller: CallerContext) -> PolicyDecision:
    if requirement.kind == RequirementKind.PUBLIC:
        return PolicyDecision.ALLOW
    if not caller.is_authenticated:
        return PolicyDecision.UNAUTHENTICATED
    if requirement.kind == RequirementKind.AUTHENTICATED_ANY:
        return PolicyDecision.ALLOW
    if caller.role in requirement.roles:
        return PolicyDecision.ALLOW
    return PolicyDecision.FORBIDDEN
