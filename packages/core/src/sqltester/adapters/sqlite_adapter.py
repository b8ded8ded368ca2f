"""
SQLite数据库适配器
使用aiosqlite，在后台线程中执行sqlite3调用，结果以协程形式返回
"""

from typing import Any, Dict, List, Optional

import aiosqlite

from .base import DataAdapter
from ..types.core_types import ConnectionConfig, DbType, QueryResult, SQLITE_MEMORY
from ..utils.type_converter import convert_rows_to_serializable


class SQLiteAdapter(DataAdapter):
    """
    SQLite适配器
    - 数据库即文件（或内存实例），不存在库管理和用户管理
    - autocommit模式，与其他引擎行为保持一致
    """

    db_type = DbType.SQLITE

    def __init__(self, config: ConnectionConfig, db_type: Optional[DbType] = None):
        super().__init__(config, db_type)
        self.database_path = config.database or SQLITE_MEMORY
        self.config.database = self.database_path

    async def connect(self) -> None:
        """打开（或创建）数据库文件"""
        # isolation_level=None 关闭sqlite3模块的隐式事务
        self.connection = await aiosqlite.connect(self.database_path, isolation_level=None)
        self.connection.row_factory = aiosqlite.Row
        self._forget_password()

    async def disconnect(self) -> None:
        if self.connection is not None:
            try:
                await self.connection.close()
            finally:
                self.connection = None

    async def get_server_info(self) -> Dict[str, Any]:
        # SQLite没有有意义的服务器版本探测，返回数据库路径
        return {"database": self.database_path}

    async def list_databases(self) -> List[str]:
        return [self.database_path]

    async def create_database(self, name: str) -> None:
        raise self._unsupported(
            "create_database",
            "SQLite does not support CREATE DATABASE. Use a file path instead."
        )

    async def drop_database(self, name: str) -> None:
        raise self._unsupported("drop_database", "SQLite does not support DROP DATABASE")

    async def list_users(self) -> List[Dict[str, str]]:
        raise self._unsupported("list_users", "SQLite does not have a user management system")

    async def create_user(self, username: str, password: str, host: Optional[str] = None) -> None:
        raise self._unsupported("create_user", "SQLite does not support user management")

    async def drop_user(self, username: str, host: Optional[str] = None) -> None:
        raise self._unsupported("drop_user", "SQLite does not support user management")

    async def execute_query(self, sql: str) -> QueryResult:
        """执行单条SQL语句"""
        conn = self._require_connection()
        async with conn.execute(sql) as cursor:
            rows = await cursor.fetchall()
            if cursor.description:
                fields = [column[0] for column in cursor.description]
                data = convert_rows_to_serializable(dict(row) for row in rows)
                return QueryResult(rows=data, row_count=len(data), fields=fields)
            # DDL语句的rowcount为-1
            return QueryResult(rows=[], row_count=max(cursor.rowcount, 0), fields=[])
