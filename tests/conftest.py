"""
Virasat - Test Configuration and Fixtures
"""
import os

# Set testing environment before settings are loaded
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ["STORAGE_BACKEND"] = "supabase"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from fakes import FakeSupabase
from virasat.main import app
from virasat.core.dependencies import get_user_supabase
from virasat.database.supabase_client import get_auth_flow_factory, get_supabase
from virasat.modules.auth.service import clear_session_cache
from virasat.modules.nominees import registry


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(fake_db: FakeSupabase):
    """Test client with every Supabase dependency pointed at the in-memory fake"""
    clear_session_cache()
    registry.reset()
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_auth_flow_factory] = lambda: fake_db.flow_client
    app.dependency_overrides[get_user_supabase] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(fake_db: FakeSupabase, email: str) -> dict:
    user_id, token = fake_db.auth.add_user(email, metadata={"full_name": email.split("@")[0].title(), "phone": "+91 98765 43210"})
    return {"id": user_id, "email": email, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def alice(fake_db: FakeSupabase) -> dict:
    return _make_user(fake_db, "alice@virasat.in")


@pytest.fixture
def bob(fake_db: FakeSupabase) -> dict:
    return _make_user(fake_db, "bob@virasat.in")
