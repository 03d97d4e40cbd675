"""
Core dependencies for route protection and session resolution
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from virasat.config.settings import settings
from virasat.database.supabase_client import SupabaseClient, get_auth_flow_factory, get_supabase
from virasat.modules.auth.service import AuthService
from virasat.modules.documents.storage import ObjectStore, get_object_store
from virasat.core.errors import AuthRequired
from supabase import Client
from typing import Any, Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported as AuthRequired (401 + redirect hint), not 403
security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    flow_client_factory: Callable[[], Client] = Depends(get_auth_flow_factory)
) -> AuthService:
    return AuthService(supabase, flow_client_factory)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Optional[str]:
    if credentials is None:
        return None
    return credentials.credentials


def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Session owner for the request; raises AuthRequired before any store call"""
    return auth_service.get_current_user(token)


def get_optional_user(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Session owner if the token is valid, otherwise None (landing page)"""
    if not token:
        return None
    try:
        return auth_service.get_current_user(token)
    except AuthRequired:
        return None


def get_user_supabase(
    token: Optional[str] = Depends(get_bearer_token),
    user_data: Dict[str, Any] = Depends(get_current_user)
) -> Client:
    """Supabase client bound to the caller's session (resolved only after the session is valid)"""
    return SupabaseClient.for_session(token)


def get_storage(supabase: Client = Depends(get_user_supabase)) -> ObjectStore:
    """Object store for the configured backend (Supabase Storage or S3)"""
    return get_object_store(supabase, settings.storage_backend)
