import asyncio
import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from humor_admin.config import Settings
from humor_admin.core.session import CookieSessionStorage
from humor_admin.database.supabase_client import SupabaseClientFactory
from humor_admin.main import create_app

SESSION_KEY = "supabase.auth.token"


def on_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class FakeBackend:
    """In-memory stand-in for one Supabase project: PostgREST tables plus the auth user."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = tables or {}
        self.session_user: Optional[SimpleNamespace] = None
        self.refresh_on_read = False
        self.auth_error = False
        self.failing_tables = set()
        self.fail_writes = False
        self.before_update: Optional[Callable[[str], None]] = None
        self.writes: List[tuple] = []
        self.oauth_requests: List[dict] = []
        self.codes: Dict[str, SimpleNamespace] = {}
        self.sign_outs = 0
        # (call, ran_on_event_loop) for every client build, auth call and query
        self.calls: List[tuple] = []

    def record(self, call: str) -> None:
        self.calls.append((call, on_event_loop()))

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(table, [])

    def row(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        return next((r for r in self.rows(table) if r["id"] == row_id), None)


class FakeQuery:
    def __init__(self, backend: FakeBackend, table: str):
        self.backend = backend
        self.table = table
        self.op = "select"
        self.payload: Dict[str, Any] = {}
        self.filters: List[tuple] = []
        self.order_by = None
        self.limit_n = None
        self.count = None
        self.head = False

    def select(self, *columns, count=None, head=None):
        self.op = "select"
        self.count = count
        self.head = bool(head)
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = dict(payload)
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def is_(self, column, value):
        self.filters.append(("is", column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        for kind, column, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "is" and value == "null" and row.get(column) is not None:
                return False
        return True

    def execute(self):
        backend = self.backend
        backend.record(f"{self.op} {self.table}")
        if self.table in backend.failing_tables:
            raise RuntimeError(f'relation "{self.table}" is unavailable')
        if self.op != "select" and backend.fail_writes:
            raise RuntimeError("write rejected by backend")

        rows = backend.rows(self.table)
        if self.op == "update" and backend.before_update is not None:
            backend.before_update(self.table)
        matched = [r for r in rows if self._matches(r)]

        if self.op == "select":
            count = len(matched) if self.count else None
            if self.order_by:
                column, desc = self.order_by
                matched = sorted(
                    matched,
                    key=lambda r: (r.get(column) is not None, r.get(column)),
                    reverse=desc,
                )
            if self.limit_n is not None:
                matched = matched[:self.limit_n]
            data = [] if self.head else [dict(r) for r in matched]
            return SimpleNamespace(data=data, count=count)

        if self.op == "update":
            for r in matched:
                r.update(self.payload)
            backend.writes.append(("update", self.table, dict(self.payload), list(self.filters)))
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        backend.tables[self.table] = [r for r in rows if not any(r is m for m in matched)]
        backend.writes.append(("delete", self.table, None, list(self.filters)))
        return SimpleNamespace(data=[dict(r) for r in matched], count=None)


class FakeAuth:
    def __init__(self, backend: FakeBackend, storage: CookieSessionStorage):
        self.backend = backend
        self.storage = storage

    def get_user(self, jwt=None):
        self.backend.record("get_user")
        if self.backend.auth_error:
            raise RuntimeError("invalid JWT: unable to parse or verify signature")
        user = self.backend.session_user
        if user is None:
            return None
        if self.backend.refresh_on_read:
            self.storage.set_item(SESSION_KEY, json.dumps({"access_token": "refreshed", "user_id": user.id}))
        return SimpleNamespace(user=user)

    def sign_in_with_oauth(self, credentials):
        self.backend.record("sign_in_with_oauth")
        self.backend.oauth_requests.append(credentials)
        self.storage.set_item(f"{SESSION_KEY}-code-verifier", "verifier-123")
        return SimpleNamespace(
            provider=credentials["provider"],
            url=f"https://accounts.example.com/authorize?provider={credentials['provider']}",
        )

    def exchange_code_for_session(self, params):
        self.backend.record("exchange_code_for_session")
        user = self.backend.codes.get(params["auth_code"])
        if user is None:
            raise RuntimeError("invalid flow state, no valid flow state found")
        self.backend.session_user = user
        self.storage.set_item(SESSION_KEY, json.dumps({"access_token": "fresh", "user_id": user.id}))
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token="fresh"))

    def sign_out(self):
        self.backend.record("sign_out")
        self.backend.sign_outs += 1
        self.backend.session_user = None
        self.storage.remove_item(SESSION_KEY)


class FakeClient:
    def __init__(self, backend: FakeBackend, storage: CookieSessionStorage):
        self.backend = backend
        self.auth = FakeAuth(backend, storage)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.backend, name)


class FakeClientFactory(SupabaseClientFactory):
    def __init__(self, settings: Settings, backend: FakeBackend):
        super().__init__(settings)
        self.backend = backend

    def create(self, storage: CookieSessionStorage) -> FakeClient:
        self.backend.record("create_client")
        return FakeClient(self.backend, storage)


def make_user(user_id: str, email: str) -> SimpleNamespace:
    return SimpleNamespace(id=user_id, email=email)


def seed_tables() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "profiles": [
            {"id": "admin-1", "username": "root", "is_superadmin": True, "created_datetime_utc": "2024-01-01T10:00:00+00:00"},
            {"id": "u1", "username": "alice", "is_superadmin": False, "created_datetime_utc": "2024-02-01T10:00:00+00:00"},
            {"id": "u2", "username": None, "is_superadmin": False, "created_datetime_utc": "2024-03-01T10:00:00+00:00"},
        ],
        "captions": [
            {"id": "c1", "content": "When the build finally passes", "like_count": 10, "is_public": True, "created_datetime_utc": "2024-04-01T10:00:00+00:00"},
            {"id": "c2", "content": "Me explaining recursion to my cat", "like_count": 3, "is_public": False, "created_datetime_utc": "2024-04-02T10:00:00+00:00"},
            {"id": "c3", "content": "Monday, again", "like_count": 7, "is_public": True, "created_datetime_utc": "2024-04-03T10:00:00+00:00"},
        ],
        "images": [
            {"id": "img1", "url": "https://img.example.com/raw/1.png", "cdn_url": "https://cdn.example.com/1.png", "is_common_use": True, "created_datetime_utc": "2024-05-01T10:00:00+00:00"},
            {"id": "img2", "url": "https://img.example.com/raw/2.png", "cdn_url": None, "is_common_use": False, "created_datetime_utc": "2024-05-02T10:00:00+00:00"},
        ],
        "caption_votes": [
            {"id": "v1", "caption_id": "c1", "vote_value": 1, "created_datetime_utc": "2024-06-01T10:00:00+00:00"},
            {"id": "v2", "caption_id": "c1", "vote_value": 1, "created_datetime_utc": "2024-06-02T10:00:00+00:00"},
            {"id": "v3", "caption_id": "c2", "vote_value": -1, "created_datetime_utc": "2024-06-03T10:00:00+00:00"},
        ],
    }


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        rate_limit="1000/minute",
        environment="test",
    )


@pytest.fixture()
def backend():
    return FakeBackend(seed_tables())


@pytest.fixture()
def app(settings, backend):
    application = create_app(settings)
    application.state.supabase_factory = FakeClientFactory(settings, backend)
    return application


@pytest.fixture()
def client(app):
    return TestClient(app, follow_redirects=False)


@pytest.fixture()
def superadmin(backend):
    backend.session_user = make_user("admin-1", "admin@example.com")
    return backend.session_user


@pytest.fixture()
def regular_user(backend):
    backend.session_user = make_user("u1", "alice@example.com")
    return backend.session_user


def set_cookie_headers(response) -> List[str]:
    return response.headers.get_list("set-cookie")
