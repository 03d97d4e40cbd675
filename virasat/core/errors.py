"""
Error taxonomy shared by all modules.

Every error is an HTTPException so services can raise them directly and
routes need no translation layer; the status code and detail are what the
client shows as its one-shot notification or inline message.
"""

from fastapi import HTTPException, status
from typing import List, Optional

from virasat.config.settings import settings


class AuthRequired(HTTPException):
    """No session (or an expired one). Clients redirect to sign-in."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer", "X-Redirect-To": settings.login_path},
        )
        self.redirect_to = settings.login_path


class AuthFailed(HTTPException):
    """Credentials rejected or registration conflict."""

    def __init__(self, detail: str = "Authentication failed", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class InvalidCredentials(AuthFailed):
    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail=detail, status_code=status.HTTP_401_UNAUTHORIZED)


class EmailNotConfirmed(AuthFailed):
    def __init__(self, detail: str = "Please check your email and click the confirmation link before signing in"):
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN)


class UserAlreadyRegistered(AuthFailed):
    def __init__(self, detail: str = "An account with this email already exists. Please sign in instead"):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class ValidationFailed(HTTPException):
    """Mandatory field missing; raised before any store call."""

    def __init__(self, detail: str = "Please fill in all required fields", missing_fields: Optional[List[str]] = None):
        self.missing_fields = missing_fields or []
        if self.missing_fields:
            detail = f"{detail}: {', '.join(self.missing_fields)}"
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class StoreError(HTTPException):
    """Record or object store call failed (network, permission, constraint)."""

    def __init__(self, detail: str = "Storage operation failed"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class RecordNotFound(HTTPException):
    def __init__(self, detail: str = "Record not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidURL(HTTPException):
    def __init__(self, detail: str = "Please enter a valid URL for the death certificate"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UntrustedDomain(HTTPException):
    def __init__(self, detail: str = "Death certificate must be from an official .gov.in domain"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
