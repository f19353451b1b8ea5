"""
Auth endpoints — signup, login (OAuth2 password flow), token refresh,
sign-out and the current identity.
"""

from fastapi import (APIRouter, Cookie, Depends, HTTPException, Request,
                     Response, status)
from fastapi.security import OAuth2PasswordRequestForm
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import get_current_user, get_db
from hris.core.config import settings
from hris.core.security import (REFRESH, create_access_token,
                                create_refresh_token, decode_token,
                                subject_as_user_id, verify_password)
from hris.models.user import Role, User
from hris.schemas.profile import EmployeeRead
from hris.schemas.token import LogoutResponse, RefreshRequest, Token
from hris.schemas.user import IdentityRead, SignupRequest
from hris.services import provisioning

# Rate limiter — keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(response: Response, user_id: int) -> Token:
    """Create a token pair and mirror it into HttpOnly cookies."""
    access_token = create_access_token(user_id)
    refresh_token = create_refresh_token(user_id)

    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    response.set_cookie(
        key="refresh_token",
        value=refresh_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )
    return Token(access_token=access_token, refresh_token=refresh_token)


@router.post("/signup", response_model=EmployeeRead, status_code=201)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Self-service employee signup; the profile is provisioned immediately."""
    if not settings.ALLOW_PUBLIC_SIGNUP:
        raise HTTPException(status_code=403, detail="Signup is disabled")
    return await provisioning.sign_up(
        db,
        email=body.email,
        password=body.password,
        name=body.name,
        position=body.position,
    )


@router.post("/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_for_access_token(
    request: Request,
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
) -> Token:
    """Authenticate with email/password. Returns tokens and sets HttpOnly cookies."""
    user = await provisioning.get_user_by_email(db, form_data.username)

    if user is None or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    return _issue_tokens(response, user.id)


@router.post("/refresh", response_model=Token)
async def refresh_access_token_endpoint(
    response: Response,
    body: RefreshRequest | None = None,
    refresh_token_cookie: str | None = Cookie(None, alias="refresh_token"),
    db: AsyncSession = Depends(get_db),
) -> Token:
    # Priority: Body > Cookie
    token_str = body.refresh_token if body and body.refresh_token else refresh_token_cookie
    if not token_str:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token missing",
        )

    user_id = subject_as_user_id(decode_token(token_str, REFRESH))
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    return _issue_tokens(response, user.id)


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    """Clear auth cookies and end the session."""
    response.delete_cookie("access_token")
    response.delete_cookie("refresh_token")
    return LogoutResponse(message="Logged out")


@router.get("/me", response_model=IdentityRead)
async def read_current_user(
    current_user: User = Depends(get_current_user),
) -> IdentityRead:
    """Return the identity context of the authenticated caller."""
    profile = current_user.profile
    return IdentityRead(
        id=current_user.id,
        email=current_user.email,
        name=profile.name if profile else None,
        position=profile.position if profile else None,
        date_of_joining=profile.date_of_joining if profile else None,
        role=current_user.role,
        is_admin=current_user.role == Role.ADMIN,
    )
