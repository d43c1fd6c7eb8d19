from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from postgrest.exceptions import APIError

from grassroots.config import AppSettings, StorageSettings, SupabaseSettings, UiSettings
from grassroots.services import CalendarService, ServiceContext


class FakeResponse:
    def __init__(self, data: Any) -> None:
        self.data = data


class FakeTable:
    """In-memory stand-in for one PostgREST table."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.rows: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self.failing: set[str] = set()
        self._next_id = 1

    def seed(self, **row: Any) -> Dict[str, Any]:
        row.setdefault("id", self._new_id())
        self.rows.append(dict(row))
        return row

    def _new_id(self) -> str:
        identifier = f"{self.name}-{self._next_id}"
        self._next_id += 1
        return identifier


class FakeQuery:
    def __init__(self, table: FakeTable) -> None:
        self._table = table
        self._op = "select"
        self._payload: Optional[Dict[str, Any]] = None
        self._filters: list[tuple[str, Any]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None

    def select(self, *_columns: str) -> "FakeQuery":
        self._op = "select"
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._op = "insert"
        self._payload = dict(payload)
        return self

    def update(self, changes: Dict[str, Any]) -> "FakeQuery":
        self._op = "update"
        self._payload = dict(changes)
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> FakeResponse:
        table = self._table
        table.calls.append(self._op)
        if self._op in table.failing:
            raise APIError({"message": f"{self._op} failed", "code": "XX000", "hint": None, "details": None})

        if self._op == "insert":
            row = dict(self._payload or {})
            row.setdefault("id", table._new_id())
            table.rows.append(row)
            return FakeResponse([dict(row)])
        if self._op == "update":
            matched = [row for row in table.rows if self._matches(row)]
            for row in matched:
                row.update(self._payload or {})
            return FakeResponse([dict(row) for row in matched])
        if self._op == "delete":
            matched = [row for row in table.rows if self._matches(row)]
            table.rows = [row for row in table.rows if not self._matches(row)]
            return FakeResponse(matched)

        rows = [dict(row) for row in table.rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda row: row[column], reverse=desc)
        if self._limit is not None:
            rows = rows[: self._limit]
        return FakeResponse(rows)


class FakeAuth:
    def __init__(self, session: Any) -> None:
        self.session = session
        self.error: Optional[Exception] = None
        self.signed_out = False

    def sign_in_with_password(self, credentials: Dict[str, str]) -> Any:
        if self.error is not None:
            raise self.error
        return SimpleNamespace(session=self.session, user=self.session.user)

    def sign_up(self, credentials: Dict[str, str]) -> Any:
        if self.error is not None:
            raise self.error
        return SimpleNamespace(session=None, user=self.session.user)

    def sign_out(self) -> None:
        self.signed_out = True


class FakeSupabaseClient:
    def __init__(self, session: Any) -> None:
        self.tables: Dict[str, FakeTable] = {}
        self.auth = FakeAuth(session)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, FakeTable(name)))


USER_ID = "user-1"


@pytest.fixture
def session() -> Any:
    return SimpleNamespace(user=SimpleNamespace(id=USER_ID, email="ada@example.com"))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        supabase=SupabaseSettings(url="http://localhost:54321", anon_key="anon-key"),
        storage=StorageSettings(events_table="events", profiles_table="user_profiles"),
        ui=UiSettings(app_name="Grassroots Test", default_color="#3B82F6", max_visible_events=3),
    )


@pytest.fixture
def client(session: Any) -> FakeSupabaseClient:
    return FakeSupabaseClient(session)


@pytest.fixture
def events_table(client: FakeSupabaseClient) -> FakeTable:
    return client.tables.setdefault("events", FakeTable("events"))


@pytest.fixture
def profiles_table(client: FakeSupabaseClient) -> FakeTable:
    return client.tables.setdefault("user_profiles", FakeTable("user_profiles"))


@pytest.fixture
def context(settings: AppSettings, client: FakeSupabaseClient, session: Any) -> ServiceContext:
    ctx = ServiceContext(settings=settings)
    ctx.gateway.attach_client(client)
    ctx.gateway.set_session(session)
    return ctx


@pytest.fixture
def calendar(context: ServiceContext) -> CalendarService:
    return CalendarService(context)
