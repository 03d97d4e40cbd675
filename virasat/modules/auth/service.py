import hashlib
import logging
import threading
import time
from supabase import Client
from virasat.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    OAuthRequest, OAuthResponse, PasswordResetRequest, AuthCallbackRequest
)
from virasat.config.settings import settings
from virasat.core.errors import (
    AuthRequired, AuthFailed, InvalidCredentials, EmailNotConfirmed,
    UserAlreadyRegistered, ValidationFailed
)
from fastapi import HTTPException
from typing import Callable, Dict, Any, Optional

logger = logging.getLogger(__name__)

# Short-lived cache for get_current_user; every record call resolves the owner from the token
_SESSION_CACHE: Dict[str, tuple] = {}
_SESSION_CACHE_LOCK = threading.Lock()
_SESSION_CACHE_TTL_SEC = 60
_SESSION_CACHE_MAX_SIZE = 500

_DUPLICATE_USER_MARKERS = (
    "user already registered",
    "already been registered",
    "duplicate key value violates unique constraint",
    "unique_email",
)


def clear_session_cache() -> None:
    with _SESSION_CACHE_LOCK:
        _SESSION_CACHE.clear()


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_user(cache_key: str, now: float) -> Optional[Dict[str, Any]]:
    with _SESSION_CACHE_LOCK:
        entry = _SESSION_CACHE.get(cache_key)
        if entry is None:
            return None
        user_data, expiry = entry
        if now < expiry:
            return user_data
        _SESSION_CACHE.pop(cache_key, None)
        return None


def _cache_user(cache_key: str, user_data: Dict[str, Any], now: float) -> None:
    with _SESSION_CACHE_LOCK:
        if len(_SESSION_CACHE) >= _SESSION_CACHE_MAX_SIZE:
            for key in [k for k, (_, expiry) in _SESSION_CACHE.items() if expiry <= now]:
                del _SESSION_CACHE[key]
        if len(_SESSION_CACHE) < _SESSION_CACHE_MAX_SIZE:
            _SESSION_CACHE[cache_key] = (user_data, now + _SESSION_CACHE_TTL_SEC)


class AuthService:
    def __init__(self, supabase: Client, flow_client_factory: Optional[Callable[[], Client]] = None):
        # Shared client: token lookups, profile checks and revocation; never holds a session
        self.supabase = supabase
        # Sign-in, sign-up and callback calls store the session they receive on the client,
        # so each one runs on a fresh client
        self._flow_client_factory = flow_client_factory or (lambda: supabase)

    def _flow_auth(self):
        return self._flow_client_factory().auth

    def email_exists(self, email: str) -> bool:
        """True if a profile row already carries this email"""
        try:
            result = self.supabase.table("profiles")\
                .select("email")\
                .eq("email", email)\
                .limit(1)\
                .execute()
            return bool(result.data)
        except Exception as e:
            # A failed lookup must not block signup; Supabase Auth still rejects duplicates
            logger.warning(f"Profile email lookup failed: {e}")
            return False

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        missing = [
            name for name in ("full_name", "phone", "password")
            if not (getattr(register_data, name) or "").strip()
        ]
        if missing:
            raise ValidationFailed("Please fill in all fields", missing_fields=missing)
        if register_data.confirm_password is not None and register_data.confirm_password != register_data.password:
            raise ValidationFailed("Passwords do not match")

        if self.email_exists(register_data.email):
            raise UserAlreadyRegistered()

        try:
            auth_response = self._flow_auth().sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {
                        "full_name": register_data.full_name.strip(),
                        "phone": register_data.phone.strip()
                    },
                    "email_redirect_to": settings.auth_redirect_url
                }
            })

            if not auth_response.user:
                raise AuthFailed("Failed to register user")

            logger.info(f"Registered user {auth_response.user.id}")
            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="Account created. Please check your email to confirm your address",
                email_confirmation_required=auth_response.session is None
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            lowered = error_message.lower()
            if any(marker in lowered for marker in _DUPLICATE_USER_MARKERS):
                raise UserAlreadyRegistered()
            if "invalid email" in lowered:
                raise AuthFailed("Please enter a valid email address")
            if "password should be at least" in lowered:
                raise AuthFailed(error_message)
            logger.error(f"Registration failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self._flow_auth().sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise InvalidCredentials()

            if not getattr(auth_response.user, "email_confirmed_at", None):
                raise EmailNotConfirmed()

            return self._token_response(auth_response, login_data.email)
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            lowered = error_message.lower()
            if "email not confirmed" in lowered:
                raise EmailNotConfirmed()
            if "invalid" in lowered or "credentials" in lowered:
                raise InvalidCredentials()
            logger.error(f"Login failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def start_oauth(self, oauth_data: OAuthRequest) -> OAuthResponse:
        """Return the provider authorization URL; the provider redirects back to the callback"""
        provider = oauth_data.provider.strip().lower()
        if provider not in settings.get_oauth_providers_list():
            raise AuthFailed(f"Unsupported sign-in provider: {oauth_data.provider}")
        try:
            response = self._flow_auth().sign_in_with_oauth({
                "provider": provider,
                "options": {
                    "redirect_to": oauth_data.redirect_to or settings.auth_redirect_url
                }
            })
            return OAuthResponse(provider=provider, url=response.url)
        except Exception as e:
            logger.error(f"OAuth sign-in failed for {provider}: {e}")
            raise AuthFailed(f"Sign-in with {provider} failed")

    def send_password_reset(self, reset_data: PasswordResetRequest) -> None:
        """Send the password-reset email"""
        try:
            self._flow_auth().reset_password_for_email(
                reset_data.email,
                {"redirect_to": reset_data.redirect_to or settings.auth_redirect_url}
            )
        except Exception as e:
            logger.error(f"Password reset email failed: {e}")
            raise AuthFailed(str(e))

    def handle_callback(self, callback_data: AuthCallbackRequest) -> TokenResponse:
        """Complete an email confirmation, recovery or OAuth redirect and return the session"""
        if not callback_data.code and not callback_data.token_hash:
            raise AuthFailed("No active session found. Please try signing in again")
        try:
            if callback_data.code:
                auth_response = self._flow_auth().exchange_code_for_session({"auth_code": callback_data.code})
            else:
                auth_response = self._flow_auth().verify_otp({
                    "token_hash": callback_data.token_hash,
                    "type": callback_data.type or "email"
                })
        except Exception as e:
            logger.warning(f"Auth callback failed: {e}")
            raise AuthFailed("Authentication failed. Please try again", status_code=401)

        if not auth_response.user or not auth_response.session:
            raise AuthFailed("No active session found. Please try signing in again", status_code=401)
        return self._token_response(auth_response, auth_response.user.email or "")

    def get_current_user(self, token: Optional[str]) -> Dict[str, Any]:
        """Resolve the session owner from a Supabase access token. Cached briefly per token."""
        if not token:
            raise AuthRequired()
        cache_key = _cache_key(token)
        now = time.monotonic()
        user_data = _cached_user(cache_key, now)
        if user_data is not None:
            return user_data

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info(f"Session lookup rejected: {e}")
            raise AuthRequired("Invalid or expired session")
        if not user_response or not user_response.user:
            raise AuthRequired("Invalid or expired session")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "created_at": user.created_at,
        }
        _cache_user(cache_key, user_data, now)
        return user_data

    def logout(self, token: str) -> bool:
        """Revoke the caller's own session (refresh tokens); the access JWT lapses at expiry"""
        with _SESSION_CACHE_LOCK:
            _SESSION_CACHE.pop(_cache_key(token), None)
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            return False

    @staticmethod
    def _token_response(auth_response, fallback_email: str) -> TokenResponse:
        session = auth_response.session
        return TokenResponse(
            access_token=session.access_token,
            refresh_token=getattr(session, "refresh_token", None),
            token_type="bearer",
            expires_in=getattr(session, "expires_in", None),
            user_id=auth_response.user.id,
            email=auth_response.user.email or fallback_email
        )
