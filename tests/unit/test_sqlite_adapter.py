"""
Unit tests for SQLiteAdapter against real aiosqlite databases.
"""

from unittest.mock import MagicMock

import pytest

from sqltester.adapters.sqlite_adapter import SQLiteAdapter
from sqltester.types.core_types import ConnectionConfig, DbType
from sqltester.utils.errors import UnsupportedOperationError


@pytest.fixture
async def memory_adapter():
    adapter = SQLiteAdapter(ConnectionConfig(database=""))
    await adapter.connect()
    yield adapter
    await adapter.disconnect()


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_empty_path_is_memory(self):
        adapter = SQLiteAdapter(ConnectionConfig(database=None))
        await adapter.connect()
        try:
            assert await adapter.get_server_info() == {"database": ":memory:"}
            assert await adapter.list_databases() == [":memory:"]
        finally:
            await adapter.disconnect()
        assert adapter.connection is None

    @pytest.mark.asyncio
    async def test_file_is_created(self, tmp_path):
        path = tmp_path / "console.db"
        adapter = SQLiteAdapter(ConnectionConfig(database=str(path)))
        await adapter.connect()
        try:
            await adapter.execute_query("CREATE TABLE t (id INTEGER)")
        finally:
            await adapter.disconnect()

        assert path.exists()
        assert adapter.db_type is DbType.SQLITE

    @pytest.mark.asyncio
    async def test_writes_are_autocommitted(self, tmp_path):
        path = str(tmp_path / "auto.db")
        writer = SQLiteAdapter(ConnectionConfig(database=path))
        await writer.connect()
        await writer.execute_query("CREATE TABLE t (id INTEGER)")
        await writer.execute_query("INSERT INTO t VALUES (1)")

        reader = SQLiteAdapter(ConnectionConfig(database=path))
        await reader.connect()
        try:
            result = await reader.execute_query("SELECT COUNT(*) AS n FROM t")
        finally:
            await reader.disconnect()
            await writer.disconnect()

        assert result.rows == [{"n": 1}]

    @pytest.mark.asyncio
    async def test_bad_path_raises_driver_error(self, tmp_path):
        adapter = SQLiteAdapter(ConnectionConfig(database=str(tmp_path / "missing" / "x.db")))
        with pytest.raises(Exception):
            await adapter.connect()


class TestExecuteQuery:

    @pytest.mark.asyncio
    async def test_select_literal(self, memory_adapter):
        result = await memory_adapter.execute_query("SELECT 1 as x")

        assert result.to_dict() == {"rows": [{"x": 1}], "rowCount": 1, "fields": ["x"]}

    @pytest.mark.asyncio
    async def test_ddl_has_no_rows_or_fields(self, memory_adapter):
        result = await memory_adapter.execute_query("CREATE TABLE people (id INTEGER, name TEXT)")

        assert result.rows == []
        assert result.fields == []
        assert result.row_count == 0

    @pytest.mark.asyncio
    async def test_dml_reports_affected_rows(self, memory_adapter):
        await memory_adapter.execute_query("CREATE TABLE people (id INTEGER, name TEXT)")
        await memory_adapter.execute_query("INSERT INTO people VALUES (1, 'ada'), (2, 'bob'), (3, 'cy')")

        result = await memory_adapter.execute_query("UPDATE people SET name = 'x' WHERE id > 1")

        assert result.row_count == 2
        assert result.rows == []

    @pytest.mark.asyncio
    async def test_empty_select_keeps_fields(self, memory_adapter):
        await memory_adapter.execute_query("CREATE TABLE people (id INTEGER, name TEXT)")

        result = await memory_adapter.execute_query("SELECT id, name FROM people")

        assert result.rows == []
        assert result.row_count == 0
        assert result.fields == ["id", "name"]

    @pytest.mark.asyncio
    async def test_rows_preserve_field_order(self, memory_adapter):
        result = await memory_adapter.execute_query("SELECT 'b' AS zeta, 2 AS alpha, NULL AS mid")

        assert result.fields == ["zeta", "alpha", "mid"]
        assert list(result.rows[0].keys()) == ["zeta", "alpha", "mid"]
        assert result.rows[0] == {"zeta": "b", "alpha": 2, "mid": None}

    @pytest.mark.asyncio
    async def test_blob_is_serialisable(self, memory_adapter):
        result = await memory_adapter.execute_query("SELECT X'FF00' AS raw")

        assert result.rows == [{"raw": "ff00"}]

    @pytest.mark.asyncio
    async def test_syntax_error_propagates(self, memory_adapter):
        with pytest.raises(Exception) as exc_info:
            await memory_adapter.execute_query("SELEC 1")
        assert "syntax error" in str(exc_info.value)


class TestUnsupportedOperations:
    """SQLite has no catalog or principal administration."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("call", [
        lambda a: a.create_database("shop"),
        lambda a: a.drop_database("shop"),
        lambda a: a.list_users(),
        lambda a: a.create_user("bob", "pw", "%"),
        lambda a: a.drop_user("bob", "%"),
    ])
    async def test_raises_without_touching_driver(self, call):
        adapter = SQLiteAdapter(ConnectionConfig())
        adapter.connection = MagicMock()

        with pytest.raises(UnsupportedOperationError) as exc_info:
            await call(adapter)

        assert exc_info.value.status_code == 400
        assert exc_info.value.db_type == "sqlite"
        assert adapter.connection.mock_calls == []
