"""
Authentication routes: identity login, token refresh, current user.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request

from ..auth import (
    create_tokens,
    get_required_user,
    refresh_access_token,
    verify_identity_token,
)
from ..config import get_settings
from ..dependencies import get_storage
from ..limiter import limiter
from ..logging_config import api_logger
from ..models.user import User
from ..schemas.auth import IdentityLogin, RefreshRequest, TokenResponse, UserResponse
from ..storage import Storage

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, credentials: IdentityLogin, storage: Storage = Depends(get_storage)):
    """Exchange an identity-provider token for session tokens, creating the user on first login."""
    claims = verify_identity_token(credentials.id_token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identity token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Claims the token leaves out keep their stored values
    profile = claims.model_dump(exclude={"sub"}, exclude_none=True)
    user = storage.upsert_user(claims.sub, **profile)
    api_logger.info("User logged in", user_id=user.id)

    access_token, refresh_token = create_tokens(user.id)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit("10/minute")
def refresh_tokens(request: Request, refresh_request: RefreshRequest, storage: Storage = Depends(get_storage)):
    """Get new access and refresh tokens using a valid refresh token."""
    tokens = refresh_access_token(refresh_request.refresh_token, storage.db)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    access_token, refresh_token = tokens
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.get("/user", response_model=UserResponse)
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return current_user


@router.post("/logout")
def logout(current_user: User = Depends(get_required_user)):
    """
    Logout the current user.

    Tokens are stateless, so the client drops them; the identity provider
    handles its own session.
    """
    return {"message": "Successfully logged out"}
