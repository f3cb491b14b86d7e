"""
Shared fixtures: a TestClient over the real app with Supabase replaced by a
MagicMock, and the in-process registries reset between tests.
"""
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app.main import app
from app.core.dependencies import get_current_user
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import clear_auth_cache
from app.modules.captions.store import reset_store
from app.modules.sign_language.session import reset_sessions


class ApiError(Exception):
    """Stands in for postgrest's APIError, which carries a Postgres/PostgREST code."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code


@pytest.fixture(autouse=True)
def _reset_state():
    clear_auth_cache()
    reset_sessions()
    reset_store()
    yield
    app.dependency_overrides.clear()
    clear_auth_cache()
    reset_sessions()
    reset_store()


@pytest.fixture
def api_error():
    return ApiError


@pytest.fixture
def supabase_mock():
    return MagicMock()


@pytest.fixture
def role_query(supabase_mock):
    """The execute() of `table().select().eq().single()`, used for role lookups."""
    return supabase_mock.table.return_value.select.return_value.eq.return_value.single.return_value.execute


@pytest.fixture
def client(supabase_mock):
    app.dependency_overrides[get_supabase] = lambda: supabase_mock
    app.dependency_overrides[get_service_supabase] = lambda: supabase_mock
    return TestClient(app)


@pytest.fixture
def current_user():
    return {
        "id": "user-1",
        "email": "ana@example.com",
        "user_metadata": {},
        "app_metadata": {},
        "created_at": None,
        "updated_at": None,
    }


@pytest.fixture
def auth_client(client, current_user):
    """Client whose requests are authenticated as current_user."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    return client
