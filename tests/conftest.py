"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings require these; tests never talk to a real project
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import copy
import uuid
from contextlib import ExitStack
from datetime import datetime
from types import SimpleNamespace
from typing import Generator, Optional
from unittest.mock import patch

import pytest


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        if count is not None:
            self.count = count
        elif isinstance(self.data, list):
            self.count = len(self.data)
        else:
            self.count = 1 if self.data else 0


class MockSupabaseTable:
    """Rows and configured failure for one table."""

    def __init__(self, data: list = None, count: int = None):
        self.rows: list[dict] = [dict(row) for row in (data or [])]
        self.count = count
        self.error: Optional[Exception] = None
        self.inserted: list[dict] = []
        self.calls: list[str] = []


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, table: MockSupabaseTable):
        self._table = table
        self._op = "select"
        self._payload = None
        self._filters: list[tuple[str, str, object]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None
        self._is_single = False

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        self._op = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._op = "update"
        self._payload = data
        return self

    def upsert(self, data, **kwargs):
        self._op = "upsert"
        self._payload = data
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append(("eq", column, value))
        return self

    def neq(self, column, value):
        self._filters.append(("neq", column, value))
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        self._limit = count
        return self

    def single(self):
        self._is_single = True
        return self

    def _matches(self, row: dict) -> bool:
        for op, column, value in self._filters:
            if column not in row:
                continue
            if op == "eq" and row[column] != value:
                return False
            if op == "neq" and row[column] == value:
                return False
        return True

    def _new_row(self, item: dict) -> dict:
        now = datetime.utcnow().isoformat() + "Z"
        row = copy.deepcopy(item)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", now)
        row.setdefault("updated_at", now)
        return row

    def execute(self) -> MockSupabaseResponse:
        self._table.calls.append(self._op)
        if self._table.error is not None:
            raise self._table.error

        matched = [row for row in self._table.rows if self._matches(row)]

        if self._op == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            data = [self._new_row(item) for item in items]
            self._table.rows.extend(data)
            self._table.inserted.extend(copy.deepcopy(data))

        elif self._op == "upsert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            data = []
            for item in items:
                existing = next((r for r in self._table.rows if r.get("id") == item.get("id")), None)
                if existing is not None:
                    existing.update(copy.deepcopy(item))
                    data.append(dict(existing))
                else:
                    row = self._new_row(item)
                    self._table.rows.append(row)
                    data.append(dict(row))

        elif self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
                row["updated_at"] = datetime.utcnow().isoformat() + "Z"
            data = [dict(row) for row in matched]

        elif self._op == "delete":
            self._table.rows = [row for row in self._table.rows if row not in matched]
            data = [dict(row) for row in matched]

        else:
            data = [dict(row) for row in matched]
            if self._order:
                column, desc = self._order
                data.sort(key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
            if self._limit is not None:
                data = data[:self._limit]

        if self._is_single:
            return MockSupabaseResponse(data=data[0] if data else None)

        count = self._table.count if self._op == "select" and self._table.count is not None else None
        return MockSupabaseResponse(data=data, count=count)


class MockAuthProvider:
    """Auth server state shared by every mock client."""

    def __init__(self):
        self.users_by_token: dict[str, SimpleNamespace] = {}
        self.error: Optional[Exception] = None
        self.revoked_tokens: list[str] = []
        self.oauth_requests: list[dict] = []

    def add_user(self, token: str, user_id: str, email: str = None) -> None:
        self.users_by_token[token] = SimpleNamespace(id=user_id, email=email)

    def raise_if_failing(self):
        if self.error is not None:
            raise self.error


class MockAuthAdmin:
    """Mock of `client.auth.admin`."""

    def __init__(self, provider: MockAuthProvider):
        self._provider = provider

    def sign_out(self, jwt: str, scope: str = "global"):
        self._provider.raise_if_failing()
        self._provider.revoked_tokens.append(jwt)


class MockSupabaseAuth:
    """
    Mock of the Supabase auth namespace.

    Like the real client, a successful sign-in or sign-up stores the session
    on this client (`current_session`).
    """

    def __init__(self, provider: MockAuthProvider):
        self.provider = provider
        self.admin = MockAuthAdmin(provider)
        self.current_session: Optional[SimpleNamespace] = None

    def _auth_response(self, email: str) -> SimpleNamespace:
        response = SimpleNamespace(
            user=SimpleNamespace(id=f"user-{email.split('@')[0]}", email=email),
            session=SimpleNamespace(access_token=f"token-{email}"),
        )
        self.current_session = response.session
        return response

    def sign_up(self, credentials: dict):
        self.provider.raise_if_failing()
        return self._auth_response(credentials["email"])

    def sign_in_with_password(self, credentials: dict):
        self.provider.raise_if_failing()
        return self._auth_response(credentials["email"])

    def sign_in_with_oauth(self, credentials: dict):
        self.provider.raise_if_failing()
        self.provider.oauth_requests.append(credentials)
        return SimpleNamespace(
            provider=credentials["provider"],
            url=f"https://test-project.supabase.co/auth/v1/authorize?provider={credentials['provider']}",
        )

    def sign_out(self):
        self.provider.raise_if_failing()
        if self.current_session is not None:
            self.provider.revoked_tokens.append(self.current_session.access_token)
        self.current_session = None

    def get_user(self, token: str):
        self.provider.raise_if_failing()
        user = self.provider.users_by_token.get(token)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self, auth_provider: MockAuthProvider = None):
        self._tables: dict[str, MockSupabaseTable] = {}
        self.auth_provider = auth_provider or MockAuthProvider()
        self.auth = MockSupabaseAuth(self.auth_provider)
        self.auth_clients: list["MockSupabaseClient"] = []

    def new_auth_client(self) -> "MockSupabaseClient":
        """Throwaway client sharing this client's auth server."""
        client = MockSupabaseClient(self.auth_provider)
        self.auth_clients.append(client)
        return client

    def _get(self, name: str) -> MockSupabaseTable:
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable()
        return self._tables[name]

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = MockSupabaseTable(data, count)

    def set_table_error(self, table_name: str, error: Exception):
        """Make every call on a table raise error."""
        self._get(table_name).error = error

    def rows(self, table_name: str) -> list[dict]:
        return self._get(table_name).rows

    def inserted(self, table_name: str) -> list[dict]:
        return self._get(table_name).inserted

    def calls(self, table_name: str) -> list[str]:
        return self._get(table_name).calls

    def table(self, name: str) -> MockSupabaseQuery:
        """Get mock query for a table."""
        return MockSupabaseQuery(self._get(name))


class StoreError(Exception):
    """Stand-in for a PostgREST APIError carrying a message attribute."""

    def __init__(self, message: str, code: str = "23503"):
        self.message = message
        self.code = code
        super().__init__(message)


PATCHED_MODULES = [
    "config.database",
    "services.auth_service",
    "services.candidate_service",
    "services.campaign_service",
    "services.chat_service",
    "services.profile_service",
    "services.dashboard_service",
]

SINGLETONS = [
    ("services.auth_service", "_auth_service"),
    ("services.candidate_service", "_candidate_service"),
    ("services.campaign_service", "_campaign_service"),
    ("services.chat_service", "_chat_service"),
    ("services.profile_service", "_profile_service"),
    ("services.dashboard_service", "_dashboard_service"),
]


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("campaigns", [
                {"id": "1", "name": "MBA Outreach", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase, monkeypatch) -> Generator:
    """
    Patch the database client with mock.

    Service singletons are reset so they pick up the mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("campaigns", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    import importlib

    for module_name, attribute in SINGLETONS:
        monkeypatch.setattr(importlib.import_module(module_name), attribute, None)

    with ExitStack() as stack:
        for module_name in PATCHED_MODULES:
            stack.enter_context(
                patch(f"{module_name}.get_supabase_client", return_value=mock_supabase)
            )
        stack.enter_context(
            patch("services.auth_service.create_auth_client", side_effect=mock_supabase.new_auth_client)
        )
        yield mock_supabase


@pytest.fixture(autouse=True)
def clear_preview_cache():
    """Every test starts with no staged uploads."""
    from services import preview_cache_service
    preview_cache_service.clear_previews()
    yield
    preview_cache_service.clear_previews()


@pytest.fixture
def user_session():
    """Session for a signed-in admissions officer."""
    from services.auth_service import UserSession
    return UserSession(user_id="user-123", email="officer@college.edu", access_token="token-abc")


@pytest.fixture
def inference_token(monkeypatch):
    """Configure an inference API token for the test."""
    from config import settings
    monkeypatch.setattr(settings, "huggingface_api_token", "hf_test_token")
    return "hf_test_token"


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db, user_session):
    """
    FastAPI test client with mocked database and a signed-in user.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("campaigns", [...])
            response = test_client_with_mock_db.get("/api/campaigns")
    """
    from fastapi.testclient import TestClient
    from main import app
    from services.auth_service import get_current_session

    app.dependency_overrides[get_current_session] = lambda: user_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_current_session, None)


@pytest.fixture
def anonymous_client(mock_db):
    """FastAPI test client without a session override."""
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
