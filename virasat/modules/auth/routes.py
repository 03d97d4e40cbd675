from fastapi import APIRouter, Depends, Request
from virasat.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    OAuthRequest, OAuthResponse, PasswordResetRequest, AuthCallbackRequest,
    MessageResponse
)
from virasat.modules.auth.service import AuthService
from virasat.core.dependencies import get_auth_service, get_bearer_token, get_current_user
from virasat.core.errors import AuthRequired
from virasat.core.rate_limit import limiter
from virasat.config.settings import settings
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user; a confirmation email is sent"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/oauth", response_model=OAuthResponse)
async def oauth_sign_in(
    oauth_data: OAuthRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Get the provider URL to send the browser to"""
    return service.start_oauth(oauth_data)


@router.post("/password-reset", response_model=MessageResponse)
@limiter.limit(settings.auth_rate_limit)
async def password_reset(
    request: Request,
    reset_data: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a password-reset email"""
    service.send_password_reset(reset_data)
    return MessageResponse(message="Password reset email sent. Please check your inbox")


@router.post("/callback", response_model=TokenResponse)
async def auth_callback(
    callback_data: AuthCallbackRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Complete email confirmation / OAuth redirect"""
    return service.handle_callback(callback_data)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    if not token:
        raise AuthRequired()
    service.logout(token)
    return MessageResponse(message="Logged out successfully")


@router.get("/me")
async def get_me(current_user: Dict = Depends(get_current_user)):
    """Get current authenticated user"""
    return current_user
