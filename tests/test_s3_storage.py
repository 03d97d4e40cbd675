import io
from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from fakes import FakeSupabase
from virasat.config.settings import settings
from virasat.core.errors import RecordNotFound
from virasat.modules.documents import storage
from virasat.modules.documents.service import DocumentService
from virasat.modules.documents.storage import S3Storage, SupabaseStorage, get_object_store

BUCKET = "virasat-documents"
KEY = "owner-1/1700000000000-will.pdf"


@pytest.fixture
def s3_settings(monkeypatch):
    monkeypatch.setattr(settings, "aws_access_key_id", "test-key")
    monkeypatch.setattr(settings, "aws_secret_access_key", "test-secret")
    monkeypatch.setattr(settings, "s3_bucket_name", BUCKET)


@pytest.fixture
def s3(s3_settings):
    store = S3Storage()
    with Stubber(store.s3_client) as stubber:
        yield store, stubber
        stubber.assert_no_pending_responses()


def test_list_follows_pagination(s3):
    store, stubber = s3
    modified = datetime(2024, 1, 1, tzinfo=timezone.utc)
    stubber.add_response(
        "list_objects_v2",
        {
            "IsTruncated": True,
            "NextContinuationToken": "page-2",
            "Contents": [{"Key": KEY, "Size": 10, "LastModified": modified}],
        },
        {"Bucket": BUCKET, "Prefix": "owner-1/"},
    )
    stubber.add_response(
        "list_objects_v2",
        {
            "IsTruncated": False,
            "Contents": [{"Key": "owner-1/1700000000001-deed.pdf", "Size": 20, "LastModified": modified}],
        },
        {"Bucket": BUCKET, "Prefix": "owner-1/", "ContinuationToken": "page-2"},
    )

    objects = store.list("owner-1")

    assert [(o.path, o.size) for o in objects] == [(KEY, 10), ("owner-1/1700000000001-deed.pdf", 20)]
    assert objects[0].created_at == modified


def test_upload(s3):
    store, stubber = s3
    stubber.add_response(
        "put_object",
        {"ETag": '"etag"'},
        {"Bucket": BUCKET, "Key": KEY, "Body": b"pdf", "ContentType": "application/pdf"},
    )

    assert store.upload(KEY, b"pdf", "application/pdf") == KEY


def test_upload_error_is_reraised(s3):
    store, stubber = s3
    stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)

    with pytest.raises(ClientError):
        store.upload(KEY, b"pdf", "application/pdf")


def test_download(s3):
    store, stubber = s3
    stubber.add_response(
        "get_object",
        {"Body": StreamingBody(io.BytesIO(b"pdf bytes"), 9), "ContentLength": 9},
        {"Bucket": BUCKET, "Key": KEY},
    )

    assert store.download(KEY) == b"pdf bytes"


def test_download_missing_object_is_reraised(s3):
    store, stubber = s3
    stubber.add_client_error("get_object", service_error_code="NoSuchKey", http_status_code=404)

    with pytest.raises(ClientError):
        store.download(KEY)


def test_signed_url_is_presigned_for_key(s3):
    store, _ = s3

    url = store.signed_url(KEY, 3600)

    assert BUCKET in url
    assert "1700000000000-will.pdf" in url
    assert "Expires" in url


def test_delete_existing_object(s3):
    store, stubber = s3
    stubber.add_response("head_object", {"ContentLength": 3}, {"Bucket": BUCKET, "Key": KEY})
    stubber.add_response("delete_object", {}, {"Bucket": BUCKET, "Key": KEY})

    assert store.delete(KEY) is True


def test_delete_missing_object_reports_false(s3):
    store, stubber = s3
    stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)

    assert store.delete(KEY) is False


def test_delete_error_is_reraised(s3):
    store, stubber = s3
    stubber.add_client_error("head_object", service_error_code="403", http_status_code=403)

    with pytest.raises(ClientError):
        store.delete(KEY)


def test_document_delete_on_missing_s3_object_is_not_found(s3):
    store, stubber = s3
    stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)

    with pytest.raises(RecordNotFound):
        DocumentService(FakeSupabase(), store).delete("owner-1", KEY)


def test_s3_backend_selected_and_reused(monkeypatch, s3_settings):
    monkeypatch.setattr(storage, "_s3_storage", None)
    db = FakeSupabase()

    first = get_object_store(db, "s3")

    assert isinstance(first, S3Storage)
    assert get_object_store(db, "s3") is first
    assert isinstance(get_object_store(db, "supabase"), SupabaseStorage)


def test_s3_backend_requires_configuration(monkeypatch):
    monkeypatch.setattr(storage, "_s3_storage", None)
    monkeypatch.setattr(settings, "s3_bucket_name", None)

    with pytest.raises(ValueError):
        get_object_store(FakeSupabase(), "s3")
