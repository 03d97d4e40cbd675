from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class DocumentResponse(BaseModel):
    path: str
    name: str
    size: int
    category: str
    content_type: Optional[str] = None
    created_at: Optional[datetime] = None


class UploadResult(BaseModel):
    filename: str
    success: bool
    path: Optional[str] = None
    category: Optional[str] = None
    error: Optional[str] = None


class DocumentUploadResponse(BaseModel):
    results: List[UploadResult]
    succeeded: int
    failed: int
    message: str


class SignedUrlResponse(BaseModel):
    path: str
    url: str
    expires_in: int
