import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import itertools
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from octane_nexus.config import settings
from octane_nexus.database.supabase_client import get_supabase, get_service_supabase, get_optional_supabase
from octane_nexus.modules.auth.service import clear_auth_cache
from octane_nexus.modules.generation.calibration import calibration
from octane_nexus.main import app


class FakeQuery:
    """Just enough of the postgrest query builder for the services under test"""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.mode = "select"
        self.columns = "*"
        self.payload: Any = None
        self.on_conflict = ""
        self.filters: List = []
        self.order_by: Optional[tuple] = None
        self.max_rows: Optional[int] = None

    def select(self, columns: str = "*"):
        self.mode = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.mode = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.mode = "update"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "id"):
        self.mode = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column, values):
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def order(self, column, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, count: int):
        self.max_rows = count
        return self

    def _matches(self, row) -> bool:
        return all(f(row) for f in self.filters)

    def _project(self, row) -> Dict[str, Any]:
        if self.columns.strip() == "*":
            return dict(row)
        keys = [c.strip() for c in self.columns.split(",")]
        return {k: row.get(k) for k in keys}

    def execute(self):
        if self.table in self.db.failing_tables:
            raise Exception(f"{self.table} is unavailable")
        rows = self.db.tables.setdefault(self.table, [])

        if self.mode == "select":
            found = [r for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                found.sort(key=lambda r: str(r.get(column) or ""), reverse=desc)
            if self.max_rows is not None:
                found = found[:self.max_rows]
            return SimpleNamespace(data=[self._project(r) for r in found])

        if self.mode == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = dict(item)
                row.setdefault("id", next(self.db.ids))
                rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted)

        if self.mode == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)

        if self.mode == "upsert":
            keys = [k.strip() for k in self.on_conflict.split(",") if k.strip()]
            item = dict(self.payload)
            for row in rows:
                if keys and all(str(row.get(k)) == str(item.get(k)) for k in keys):
                    row.update(item)
                    return SimpleNamespace(data=[dict(row)])
            rows.append(item)
            return SimpleNamespace(data=[dict(item)])

        raise AssertionError(f"unsupported mode {self.mode}")


class FakeAuth:
    def __init__(self):
        self.users_by_token: Dict[str, SimpleNamespace] = {}
        self.passwords: Dict[str, tuple] = {}
        self.codes: Dict[str, str] = {}
        self.otp_requests: List[Dict[str, Any]] = []
        self.get_user_calls = 0

    def add_user(self, token: str, user_id: str, email: str, password: Optional[str] = None):
        self.users_by_token[token] = SimpleNamespace(
            id=user_id, email=email, user_metadata={}, app_metadata={}
        )
        if password is not None:
            self.passwords[email] = (password, token)

    def _session(self, token: str):
        return SimpleNamespace(
            user=self.users_by_token[token],
            session=SimpleNamespace(access_token=token),
        )

    def sign_in_with_password(self, credentials: Dict[str, str]):
        password, token = self.passwords.get(credentials["email"], (None, None))
        if password is None or password != credentials["password"]:
            raise Exception("Invalid login credentials")
        return self._session(token)

    def sign_in_with_otp(self, credentials: Dict[str, Any]):
        self.otp_requests.append(credentials)
        return SimpleNamespace(user=None, session=None)

    def exchange_code_for_session(self, params: Dict[str, str]):
        token = self.codes.get(params["auth_code"])
        if token is None:
            raise Exception("invalid flow state, no valid flow state found")
        return self._session(token)

    def get_user(self, jwt: str):
        self.get_user_calls += 1
        user = self.users_by_token.get(jwt)
        if user is None:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=user)

    def sign_out(self):
        return None


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failing_tables = set()
        self.auth = FakeAuth()
        self.ids = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(name, [])


USER_ID = "user-1"
USER_EMAIL = "creator@example.com"
USER_TOKEN = "token-1"


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(settings, "stripe_secret_key", "sk_test_123")
    monkeypatch.setattr(settings, "stripe_webhook_secret", "whsec_test_secret")
    monkeypatch.setattr(settings, "site_url", "http://localhost:3000")
    monkeypatch.setattr(settings, "mock_auth_enabled", False)
    monkeypatch.setattr(settings, "environment", "development")
    clear_auth_cache()
    calibration.reset()
    yield
    clear_auth_cache()
    calibration.reset()


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_service_supabase] = lambda: fake_db
    app.dependency_overrides[get_optional_supabase] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(fake_db):
    """A signed-in user with an empty profile row"""
    fake_db.auth.add_user(USER_TOKEN, USER_ID, USER_EMAIL)
    fake_db.rows("profiles").append({"id": USER_ID, "email": USER_EMAIL, "streak_count": 0})
    return fake_db.rows("profiles")[0]


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {USER_TOKEN}"}
