"""
FastAPI Dependencies
Caller resolution from the bearer token and route authorization
"""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status, Header
from loguru import logger
from slowapi import Limiter
from slowapi.util import get_remote_address

from internship_portal.core.config import settings
from internship_portal.core.exceptions import TokenError
from internship_portal.domain.enums import Role
from internship_portal.application.repositories.interfaces import IIdentityRepository
from internship_portal.application.services.auth.interfaces import ITokenService
from internship_portal.application.services.security.context import CallerContext
from internship_portal.application.services.security.policy import (
    AuthorizationPolicy,
    PolicyDecision,
)
from .container import (
    get_authorization_policy,
    get_identity_repository,
    get_token_service,
)


# Rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from "Bearer <token>"; any other scheme is ignored"""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def get_caller_context(
    authorization: Optional[str] = Header(None),
    token_service: ITokenService = Depends(get_token_service),
    identity_repo: IIdentityRepository = Depends(get_identity_repository)
) -> CallerContext:
    """
    Resolve the caller for this request

    Any failure leaves the caller anonymous; whether that is acceptable is
    decided by the authorization policy.

    Usage:
        @router.get("/me")
        async def me(caller: CallerContext = Depends(get_caller_context)):
            ...
    """
    token = _bearer_token(authorization)
    if token is None:
        return CallerContext.anonymous()

    try:
        subject = token_service.extract_subject(token)
    except TokenError as e:
        logger.debug(f"Ignoring unparseable bearer token: {str(e)}")
        return CallerContext.anonymous()

    identity = await identity_repo.get_by_email(subject)
    if identity is None:
        logger.debug(f"Bearer token subject not found: {subject}")
        return CallerContext.anonymous()

    if not token_service.validate(token, str(identity.email)):
        logger.debug(f"Rejected bearer token for {subject}")
        return CallerContext.anonymous()

    return CallerContext(identity=identity)


def _api_path(request: Request) -> str:
    path = request.url.path
    prefix = settings.API_PREFIX.rstrip("/")
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        return path[len(prefix):] or "/"
    return path


async def enforce_authorization_policy(
    request: Request,
    caller: CallerContext = Depends(get_caller_context),
    policy: AuthorizationPolicy = Depends(get_authorization_policy)
) -> CallerContext:
    """Router-level guard; runs before any handler or business logic"""
    decision = policy.decide(request.method, _api_path(request), caller)

    if decision == PolicyDecision.UNAUTHENTICATED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if decision == PolicyDecision.FORBIDDEN:
        logger.warning(f"Forbidden: {caller} -> {request.method} {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    return caller


def require_roles(*roles: Role):
    """
    Handler-level role check on top of the route policy

    Usage:
        @router.get("/dashboard", dependencies=[Depends(require_roles(Role.ADMIN))])
    """

    async def dependency(caller: CallerContext = Depends(get_caller_context)) -> CallerContext:
        if not caller.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not caller.has_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied",
            )
        return caller

    return dependency
