"""Object store backends for user documents (Supabase Storage or S3)."""
import boto3
from botocore.exceptions import ClientError
from supabase import Client
from virasat.config.settings import settings
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union
import logging

logger = logging.getLogger(__name__)

_LIST_PAGE_SIZE = 1000


@dataclass
class StoredObject:
    path: str
    size: int = 0
    created_at: Optional[Union[datetime, str]] = None
    content_type: Optional[str] = None


class ObjectStore:
    """Operations the document flow needs; paths are `{owner}/{file}` keys"""

    def list(self, prefix: str) -> List[StoredObject]:
        raise NotImplementedError

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        raise NotImplementedError

    def download(self, path: str) -> bytes:
        raise NotImplementedError

    def signed_url(self, path: str, expires_in: int) -> str:
        raise NotImplementedError

    def delete(self, path: str) -> bool:
        """Remove the object; False if there was nothing at that path"""
        raise NotImplementedError


class SupabaseStorage(ObjectStore):
    def __init__(self, supabase: Client, bucket_name: Optional[str] = None):
        self.bucket_name = bucket_name or settings.documents_bucket
        self._bucket = supabase.storage.from_(self.bucket_name)

    def list(self, prefix: str) -> List[StoredObject]:
        objects = []
        offset = 0
        while True:
            page = self._bucket.list(prefix, {
                "limit": _LIST_PAGE_SIZE,
                "offset": offset,
                "sortBy": {"column": "created_at", "order": "desc"},
            }) or []
            for entry in page:
                # Folder placeholders have no id
                if not entry.get("id"):
                    continue
                metadata = entry.get("metadata") or {}
                objects.append(StoredObject(
                    path=f"{prefix}/{entry['name']}",
                    size=metadata.get("size") or 0,
                    created_at=entry.get("created_at"),
                    content_type=metadata.get("mimetype"),
                ))
            if len(page) < _LIST_PAGE_SIZE:
                return objects
            offset += _LIST_PAGE_SIZE

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self._bucket.upload(path, content, file_options={"content-type": content_type})
        return path

    def download(self, path: str) -> bytes:
        return self._bucket.download(path)

    def signed_url(self, path: str, expires_in: int) -> str:
        result = self._bucket.create_signed_url(path, expires_in)
        url = result.get("signedURL") or result.get("signedUrl")
        if not url:
            raise RuntimeError(f"No signed URL returned for {path}")
        return url

    def delete(self, path: str) -> bool:
        # remove() lists the objects it deleted and is empty for a missing path
        return bool(self._bucket.remove([path]))


class S3Storage(ObjectStore):
    def __init__(self):
        if not all([settings.aws_access_key_id, settings.aws_secret_access_key, settings.s3_bucket_name]):
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def list(self, prefix: str) -> List[StoredObject]:
        objects = []
        paginator = self.s3_client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=f"{prefix}/"):
                for item in page.get("Contents", []):
                    objects.append(StoredObject(
                        path=item["Key"],
                        size=item.get("Size", 0),
                        created_at=item.get("LastModified"),
                    ))
        except ClientError as e:
            logger.error(f"Failed to list S3 prefix {prefix}: {str(e)}")
            raise
        return objects

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=path,
                Body=content,
                ContentType=content_type
            )
            return path
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise

    def download(self, path: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=path)
            return response["Body"].read()
        except ClientError as e:
            logger.error(f"Failed to download {path} from S3: {str(e)}")
            raise

    def signed_url(self, path: str, expires_in: int) -> str:
        return self.s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket_name, "Key": path},
            ExpiresIn=expires_in,
        )

    def delete(self, path: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=path)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            logger.error(f"Failed to look up {path} in S3: {str(e)}")
            raise
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=path)
            return True
        except ClientError as e:
            logger.error(f"Failed to delete file from S3: {str(e)}")
            raise


_s3_storage: Optional[S3Storage] = None


def get_object_store(supabase: Client, backend: str = "supabase") -> ObjectStore:
    global _s3_storage
    if backend == "s3":
        if _s3_storage is None:
            _s3_storage = S3Storage()
            logger.info("S3 document storage initialized")
        return _s3_storage
    return SupabaseStorage(supabase)
