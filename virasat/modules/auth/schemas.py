from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    confirm_password: Optional[str] = None
    full_name: str
    phone: str


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str
    email_confirmation_required: bool = True


class OAuthRequest(BaseModel):
    provider: str = "google"
    redirect_to: Optional[str] = None


class OAuthResponse(BaseModel):
    provider: str
    url: str


class PasswordResetRequest(BaseModel):
    email: EmailStr
    redirect_to: Optional[str] = None


class AuthCallbackRequest(BaseModel):
    code: Optional[str] = None
    token_hash: Optional[str] = None
    type: Optional[str] = None  # signup | recovery | email | magiclink


class MessageResponse(BaseModel):
    message: str
