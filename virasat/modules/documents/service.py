from supabase import Client
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from virasat.config.settings import settings
from virasat.config.entities_config import DOCUMENT_CATEGORIES, DOCUMENT_CATEGORY_KEYWORDS
from virasat.core.errors import AuthRequired, RecordNotFound, StoreError, ValidationFailed
from virasat.modules.documents.schemas import (
    DocumentResponse, DocumentUploadResponse, SignedUrlResponse, UploadResult
)
from virasat.modules.documents.storage import ObjectStore
from typing import Dict, List, Optional, Tuple
import asyncio
import logging
import os
import re
import time

logger = logging.getLogger(__name__)

_UPLOAD_STAMP = re.compile(r"^\d+-")


def display_name(path: str) -> str:
    """Original filename: key basename without the upload timestamp"""
    return _UPLOAD_STAMP.sub("", os.path.basename(path), count=1)


def infer_category(filename: str) -> str:
    lowered = filename.lower()
    for keywords, label in DOCUMENT_CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return label
    return "Other"


class DocumentService:
    def __init__(self, supabase: Client, store: ObjectStore):
        self.supabase = supabase
        self.store = store
        self.table = settings.documents_table

    @staticmethod
    def _require_owner(owner_id: Optional[str]) -> str:
        if not owner_id:
            raise AuthRequired()
        return owner_id

    def _check_path(self, owner_id: Optional[str], path: str) -> str:
        owner_id = self._require_owner(owner_id)
        if not path or not path.startswith(f"{owner_id}/") or ".." in path.split("/"):
            raise RecordNotFound("Document not found")
        return path

    def _stored_categories(self, owner_id: str) -> Dict[str, str]:
        try:
            result = self.supabase.table(self.table)\
                .select("path, category")\
                .eq("user_id", owner_id)\
                .execute()
            return {row["path"]: row["category"] for row in result.data or [] if row.get("category")}
        except Exception as e:
            logger.warning(f"Document categories unavailable, using filename keywords: {e}")
            return {}

    def list_documents(self, owner_id: Optional[str]) -> List[DocumentResponse]:
        """Objects under the owner's prefix, newest first"""
        owner_id = self._require_owner(owner_id)
        try:
            objects = self.store.list(owner_id)
        except Exception as e:
            logger.error(f"Failed to list documents for {owner_id}: {e}")
            raise StoreError("Failed to load documents")

        categories = self._stored_categories(owner_id)
        documents = []
        for obj in objects:
            name = display_name(obj.path)
            documents.append(DocumentResponse(
                path=obj.path,
                name=name,
                size=obj.size or 0,
                category=categories.get(obj.path) or infer_category(name),
                content_type=obj.content_type,
                created_at=obj.created_at,
            ))
        documents.sort(key=lambda d: (d.created_at.timestamp() if d.created_at else 0.0, d.path), reverse=True)
        return documents

    async def upload_many(
        self,
        owner_id: Optional[str],
        files: List[UploadFile],
        category: Optional[str] = None
    ) -> DocumentUploadResponse:
        """Upload each file independently; one failure never fails the others"""
        owner_id = self._require_owner(owner_id)
        files = [f for f in files or [] if f.filename]
        if not files:
            raise ValidationFailed("Please select files to upload")
        if len(files) > settings.max_upload_files:
            raise ValidationFailed(f"At most {settings.max_upload_files} files can be uploaded at once")
        category_label = None
        if category:
            category_label = DOCUMENT_CATEGORIES.get(category.strip().lower())
            if category_label is None:
                raise ValidationFailed(f"Unknown document category: {category}")

        base_stamp = int(time.time() * 1000)
        results = await asyncio.gather(*(
            self._upload_one(owner_id, upload, base_stamp + index, category_label)
            for index, upload in enumerate(files)
        ))

        succeeded = sum(1 for r in results if r.success)
        failed = len(results) - succeeded
        if failed:
            message = f"{succeeded} of {len(results)} file(s) uploaded; {failed} failed"
        else:
            message = f"{succeeded} file(s) uploaded successfully"
        return DocumentUploadResponse(results=list(results), succeeded=succeeded, failed=failed, message=message)

    async def _upload_one(
        self,
        owner_id: str,
        upload: UploadFile,
        stamp: int,
        category_label: Optional[str]
    ) -> UploadResult:
        filename = os.path.basename(upload.filename.replace("\\", "/"))
        path = f"{owner_id}/{stamp}-{filename}"
        category = category_label or infer_category(filename)
        content_type = upload.content_type or "application/octet-stream"
        try:
            content = await upload.read()
            await run_in_threadpool(self.store.upload, path, content, content_type)
        except Exception as e:
            logger.error(f"Upload of {filename} failed: {e}")
            return UploadResult(filename=filename, success=False, error="Upload failed")

        await run_in_threadpool(self._record_document, owner_id, path, filename, category, len(content), content_type)
        logger.info(f"Uploaded document {path}")
        return UploadResult(filename=filename, success=True, path=path, category=category)

    def _record_document(
        self,
        owner_id: str,
        path: str,
        filename: str,
        category: str,
        size: int,
        content_type: str
    ) -> None:
        try:
            self.supabase.table(self.table).insert({
                "user_id": owner_id,
                "path": path,
                "name": filename,
                "category": category,
                "size": size,
                "content_type": content_type,
            }).execute()
        except Exception as e:
            # The object is stored; listing falls back to filename keywords for its category
            logger.warning(f"Failed to record category for {path}: {e}")

    def signed_url(self, owner_id: Optional[str], path: str) -> SignedUrlResponse:
        """Time-limited link for viewing one document"""
        path = self._check_path(owner_id, path)
        ttl = settings.signed_url_ttl_seconds
        try:
            url = self.store.signed_url(path, ttl)
        except Exception as e:
            logger.error(f"Failed to sign {path}: {e}")
            raise StoreError("Failed to open document")
        return SignedUrlResponse(path=path, url=url, expires_in=ttl)

    def download(self, owner_id: Optional[str], path: str) -> Tuple[bytes, str]:
        """Raw bytes plus the name to save them under"""
        path = self._check_path(owner_id, path)
        try:
            content = self.store.download(path)
        except Exception as e:
            logger.error(f"Failed to download {path}: {e}")
            raise StoreError("Failed to download document")
        return content, display_name(path)

    def delete(self, owner_id: Optional[str], path: str) -> None:
        path = self._check_path(owner_id, path)
        try:
            existed = self.store.delete(path)
        except Exception as e:
            logger.error(f"Failed to delete {path}: {e}")
            raise StoreError("Failed to delete document")
        if not existed:
            raise RecordNotFound("Document not found")
        try:
            self.supabase.table(self.table)\
                .delete()\
                .eq("path", path)\
                .eq("user_id", owner_id)\
                .execute()
        except Exception as e:
            logger.warning(f"Document {path} removed but its category row was not: {e}")
        logger.info(f"Deleted document {path}")
