"""
Authentication Endpoints
/api/auth/* routes
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger

from internship_portal.core.config import settings
from internship_portal.core.exceptions import AuthenticationException
from internship_portal.application.services.auth.interfaces import IAuthService
from internship_portal.application.services.security.context import CallerContext
from internship_portal.presentation.api.v1.container import get_auth_service
from internship_portal.presentation.api.v1.dependencies import get_caller_context, limiter
from internship_portal.presentation.api.v1.schemas.auth import LoginRequest, LoginResponse, MeResponse
from internship_portal.presentation.api.v1.validators import ensure_valid, validate_login


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    credentials: LoginRequest,
    auth_service: IAuthService = Depends(get_auth_service)
):
    """
    Exchange email/senha for a bearer token

    Every authentication failure gets the same 401 message so the response
    never reveals whether the email exists.
    """
    ensure_valid(validate_login(credentials))

    try:
        result = await auth_service.authenticate(credentials.email.strip(), credentials.password)
    except AuthenticationException as e:
        logger.warning(f"Authentication failed for {credentials.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except Exception as e:
        logger.opt(exception=e).error(f"Login error for {credentials.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Login failed: {str(e)}",
        )

    return LoginResponse.from_result(result)


@router.get("/me", response_model=MeResponse)
async def me(caller: CallerContext = Depends(get_caller_context)):
    """Identity behind the bearer token"""
    if not caller.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return MeResponse.from_entity(caller.identity)
