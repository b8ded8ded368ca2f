"""
PostgreSQL数据库适配器
使用asyncpg提供异步操作
"""

from typing import Any, Dict, List, Optional

import asyncpg

from .base import DataAdapter
from ..types.core_types import ConnectionConfig, DbType, QueryResult
from ..utils.identifiers import quote_literal
from ..utils.type_converter import convert_rows_to_serializable

DEFAULT_PORT = 5432
DEFAULT_DATABASE = "postgres"
# PostgreSQL没有MySQL那样的 user@host 概念
NO_HOST = "N/A"


class PostgreSQLAdapter(DataAdapter):
    """
    PostgreSQL数据库适配器
    - 单个asyncpg连接（非连接池），会话独占
    - 任意SQL通过预备语句执行，以便在零行结果时也能拿到字段名
    """

    db_type = DbType.POSTGRESQL

    def __init__(self, config: ConnectionConfig, db_type: Optional[DbType] = None):
        super().__init__(config, db_type)
        self.connection_params = self._prepare_connection_params(config)

    def _prepare_connection_params(self, config: ConnectionConfig) -> Dict[str, Any]:
        """
        准备asyncpg连接参数
        database为空时连接默认的postgres库
        """
        return {
            "host": config.host or "localhost",
            "port": int(config.port or DEFAULT_PORT),
            "user": config.username or None,
            "password": config.password or None,
            "database": config.database or DEFAULT_DATABASE,
        }

    async def connect(self) -> None:
        """建立PostgreSQL连接"""
        self.connection = await asyncpg.connect(**self.connection_params)
        self.connection_params.pop("password", None)
        self._forget_password()

    async def disconnect(self) -> None:
        """关闭PostgreSQL连接"""
        if self.connection is not None:
            try:
                await self.connection.close()
            finally:
                self.connection = None

    async def get_server_info(self) -> Dict[str, Any]:
        conn = self._require_connection()
        return {"version": await conn.fetchval("SELECT version()")}

    async def list_databases(self) -> List[str]:
        conn = self._require_connection()
        rows = await conn.fetch("SELECT datname FROM pg_database WHERE datistemplate = false")
        return [row["datname"] for row in rows]

    async def create_database(self, name: str) -> None:
        conn = self._require_connection()
        await conn.execute(f'CREATE DATABASE "{name}"')

    async def drop_database(self, name: str) -> None:
        conn = self._require_connection()
        await conn.execute(f'DROP DATABASE "{name}"')

    async def list_users(self) -> List[Dict[str, str]]:
        conn = self._require_connection()
        rows = await conn.fetch("SELECT usename FROM pg_user")
        return [{"user": row["usename"], "host": NO_HOST} for row in rows]

    async def create_user(self, username: str, password: str, host: Optional[str] = None) -> None:
        # 工具语句不支持$1参数，密码以转义后的字面量写入
        conn = self._require_connection()
        await conn.execute(f'CREATE USER "{username}" WITH PASSWORD {quote_literal(password)}')

    async def drop_user(self, username: str, host: Optional[str] = None) -> None:
        conn = self._require_connection()
        await conn.execute(f'DROP USER "{username}"')

    async def execute_query(self, sql: str) -> QueryResult:
        """
        执行任意SQL
        预备语句不支持一次执行多条命令，此时退回简单查询协议，只返回最后一条命令的状态
        """
        conn = self._require_connection()
        try:
            statement = await conn.prepare(sql)
        except asyncpg.PostgresSyntaxError as e:
            if "multiple commands" not in str(e):
                raise
            status = await conn.execute(sql)
            return QueryResult(rows=[], row_count=_status_row_count(status), fields=[])

        fields = [attr.name for attr in statement.get_attributes()]
        records = await statement.fetch()
        if fields:
            rows = convert_rows_to_serializable(dict(record) for record in records)
            return QueryResult(rows=rows, row_count=len(rows), fields=fields)
        return QueryResult(rows=[], row_count=_status_row_count(statement.get_statusmsg()), fields=[])


def _status_row_count(status: Optional[str]) -> int:
    """
    从命令状态标签解析受影响行数
    例如 "INSERT 0 3" -> 3, "UPDATE 5" -> 5, "CREATE TABLE" -> 0
    """
    if not status:
        return 0
    last = status.split()[-1]
    return int(last) if last.isdigit() else 0
