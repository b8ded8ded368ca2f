"""
Pytest configuration and shared fixtures for sqltester tests.

This module provides:
- FakeAdapter: in-memory stand-in for a MySQL/PostgreSQL server
- An adapter factory that uses FakeAdapter for network engines and the real
  aiosqlite-backed adapter for SQLite
- App / TestClient fixtures wired to an isolated registry and config
"""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from sqltester.adapters.adapter_factory import create_adapter
from sqltester.adapters.base import DataAdapter
from sqltester.adapters.connection_manager import ConnectionRegistry
from sqltester.api.app import create_app
from sqltester.config.test_config import TestConfig
from sqltester.types.core_types import ConnectionConfig, DbType, QueryResult

# ============================================================================
# FAKE ADAPTER
# ============================================================================


class FakeAdapter(DataAdapter):
    """Network-engine adapter backed by in-memory catalogs."""

    db_type = DbType.MYSQL

    def __init__(self, config: ConnectionConfig, db_type: Optional[DbType] = None):
        super().__init__(config, db_type)
        self.seen_password = config.password
        self.databases: List[str] = ["information_schema", "mysql"]
        self.users: List[Dict[str, str]] = [{"user": "root", "host": "localhost"}]
        self.calls: List[str] = []
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.disconnect_error: Optional[Exception] = None
        self.last_sql: Optional[str] = None

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.config.password == "wrong":
            raise Exception(f"Access denied for user '{self.config.username}'")
        self.connection = object()
        self._forget_password()

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connection = None
        if self.disconnect_error is not None:
            raise self.disconnect_error

    async def get_server_info(self) -> Dict[str, Any]:
        return {"version": "8.0.36-fake"}

    async def list_databases(self) -> List[str]:
        self.calls.append("list_databases")
        return list(self.databases)

    async def create_database(self, name: str) -> None:
        self.calls.append("create_database")
        if name in self.databases:
            raise Exception(f"Can't create database '{name}'; database exists")
        self.databases.append(name)

    async def drop_database(self, name: str) -> None:
        self.calls.append("drop_database")
        if name not in self.databases:
            raise Exception(f"Can't drop database '{name}'; database doesn't exist")
        self.databases.remove(name)

    async def list_users(self) -> List[Dict[str, str]]:
        self.calls.append("list_users")
        return list(self.users)

    async def create_user(self, username: str, password: str, host: Optional[str] = None) -> None:
        self.calls.append("create_user")
        self.users.append({"user": username, "host": host or "%"})

    async def drop_user(self, username: str, host: Optional[str] = None) -> None:
        self.calls.append("drop_user")
        self.users.remove({"user": username, "host": host or "%"})

    async def execute_query(self, sql: str) -> QueryResult:
        self.calls.append("execute_query")
        self.last_sql = sql
        if sql.strip().lower() == "select 1 as x":
            return QueryResult(rows=[{"x": 1}], row_count=1, fields=["x"])
        if sql.strip().lower().startswith("select nope"):
            raise Exception("Unknown column 'nope' in 'field list'")
        return QueryResult(rows=[], row_count=0, fields=[])


class RecordingAdapterFactory:
    """Adapter factory that remembers every adapter it built."""

    def __init__(self):
        self.created: List[DataAdapter] = []

    def __call__(self, db_type: DbType, config: ConnectionConfig) -> DataAdapter:
        if db_type is DbType.SQLITE:
            adapter = create_adapter(db_type, config)
        else:
            adapter = FakeAdapter(config, db_type)
        self.created.append(adapter)
        return adapter

    @property
    def last(self) -> DataAdapter:
        return self.created[-1]


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def adapter_factory() -> RecordingAdapterFactory:
    return RecordingAdapterFactory()


@pytest.fixture
def registry(adapter_factory) -> ConnectionRegistry:
    return ConnectionRegistry(adapter_factory=adapter_factory)


@pytest.fixture
def test_config() -> TestConfig:
    return TestConfig(test_overrides={
        "session_secret": "test-secret-key-for-testing-only",
        "cors_origins": "http://localhost:3000",
    })


@pytest.fixture
def app(test_config, registry):
    app = create_app(test_config, registry)
    assert app.state.registry is registry
    return app


@pytest.fixture
def client(app):
    """TestClient with lifespan; cookies persist across requests (one session)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mysql_client(client, adapter_factory):
    """Client whose session is connected to a fake MySQL server."""
    resp = client.post("/api/test-connection", json={
        "type": "mysql", "host": "db", "port": 3306,
        "username": "root", "password": "secret", "database": "",
    })
    assert resp.status_code == 200, resp.text
    # the session must be served by the injected factory, never a real driver
    assert isinstance(adapter_factory.last, FakeAdapter)
    return client


@pytest.fixture
def sqlite_client(client):
    """Client whose session is connected to an in-memory SQLite database."""
    resp = client.post("/api/test-connection", json={"type": "sqlite", "database": ""})
    assert resp.status_code == 200, resp.text
    return client
