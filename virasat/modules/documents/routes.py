from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile
from virasat.core.dependencies import get_current_user, get_storage, get_user_supabase
from virasat.modules.documents.schemas import DocumentResponse, DocumentUploadResponse, SignedUrlResponse
from virasat.modules.documents.service import DocumentService
from virasat.modules.documents.storage import ObjectStore
from supabase import Client
from typing import Dict, List, Optional
from urllib.parse import quote

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(
    supabase: Client = Depends(get_user_supabase),
    store: ObjectStore = Depends(get_storage)
) -> DocumentService:
    return DocumentService(supabase, store)


@router.get("", response_model=List[DocumentResponse])
def list_documents(
    user_data: Dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service)
):
    """List the caller's uploaded documents"""
    return service.list_documents(user_data["id"])


@router.post("", response_model=DocumentUploadResponse)
async def upload_documents(
    response: Response,
    files: List[UploadFile] = File(...),
    category: Optional[str] = Form(None),
    user_data: Dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service)
):
    """
    Upload one or more files. Each file is stored independently and reported
    in `results`: 201 when all succeed, 207 when some fail, 502 when all fail.
    """
    result = await service.upload_many(user_data["id"], files, category)
    if result.failed == 0:
        response.status_code = 201
    elif result.succeeded == 0:
        response.status_code = 502
    else:
        response.status_code = 207
    return result


@router.get("/signed-url", response_model=SignedUrlResponse)
def get_signed_url(
    path: str = Query(...),
    user_data: Dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service)
):
    """Time-limited URL for viewing a document"""
    return service.signed_url(user_data["id"], path)


@router.get("/download")
def download_document(
    path: str = Query(...),
    user_data: Dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service)
):
    """Download a document under its original filename"""
    content, filename = service.download(user_data["id"], path)
    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}
    )


@router.delete("", status_code=204)
def delete_document(
    path: str = Query(...),
    user_data: Dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service)
):
    """Delete a document"""
    service.delete(user_data["id"], path)
    return None
