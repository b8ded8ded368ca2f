"""
MySQL数据库适配器 - 同时用于MySQL和MariaDB
使用aiomysql提供异步操作
"""

from typing import Any, Dict, List, Optional

import aiomysql

from .base import DataAdapter
from ..types.core_types import ConnectionConfig, DbType, QueryResult
from ..utils.type_converter import convert_rows_to_serializable

DEFAULT_PORT = 3306
DEFAULT_USER_HOST = "%"


class MySQLAdapter(DataAdapter):
    """
    MySQL / MariaDB 适配器
    - 单连接，autocommit模式（DDL和DML立即生效）
    - DictCursor 返回字段名到值的映射
    """

    db_type = DbType.MYSQL

    def __init__(self, config: ConnectionConfig, db_type: Optional[DbType] = None):
        super().__init__(config, db_type)
        self.connection_params = self._prepare_connection_params(config)

    def _prepare_connection_params(self, config: ConnectionConfig) -> Dict[str, Any]:
        """
        准备aiomysql连接参数
        database为空时不选择默认库
        """
        return {
            "host": config.host or "localhost",
            "port": int(config.port or DEFAULT_PORT),
            "user": config.username or "",
            "password": config.password or "",
            "db": config.database or None,
            "autocommit": True,
        }

    async def connect(self) -> None:
        """建立MySQL连接"""
        self.connection = await aiomysql.connect(**self.connection_params)
        # 密码只在建立连接时需要
        self.connection_params.pop("password", None)
        self._forget_password()

    async def disconnect(self) -> None:
        """关闭MySQL连接（发送COM_QUIT）"""
        if self.connection is not None:
            try:
                await self.connection.ensure_closed()
            finally:
                self.connection = None

    async def _fetch(self, sql: str, args: Any = None) -> List[Dict[str, Any]]:
        conn = self._require_connection()
        async with conn.cursor(aiomysql.DictCursor) as cur:
            await cur.execute(sql, args)
            return list(await cur.fetchall())

    async def _execute(self, sql: str, args: Any = None) -> int:
        conn = self._require_connection()
        async with conn.cursor() as cur:
            return await cur.execute(sql, args)

    async def get_server_info(self) -> Dict[str, Any]:
        rows = await self._fetch("SELECT VERSION() AS version")
        return {"version": rows[0]["version"] if rows else None}

    async def list_databases(self) -> List[str]:
        rows = await self._fetch("SHOW DATABASES")
        return [row["Database"] for row in rows]

    async def create_database(self, name: str) -> None:
        await self._execute(f"CREATE DATABASE `{name}`")

    async def drop_database(self, name: str) -> None:
        await self._execute(f"DROP DATABASE `{name}`")

    async def list_users(self) -> List[Dict[str, str]]:
        rows = await self._fetch("SELECT User, Host FROM mysql.user")
        return [
            {"user": _as_text(row["User"]), "host": _as_text(row["Host"])}
            for row in rows
        ]

    async def create_user(self, username: str, password: str, host: Optional[str] = None) -> None:
        # 用户名已通过标识符校验；主机和密码由aiomysql转义为字符串字面量
        await self._execute(
            "CREATE USER %s@%s IDENTIFIED BY %s",
            (username, host or DEFAULT_USER_HOST, password),
        )

    async def drop_user(self, username: str, host: Optional[str] = None) -> None:
        await self._execute("DROP USER %s@%s", (username, host or DEFAULT_USER_HOST))

    async def execute_query(self, sql: str) -> QueryResult:
        """执行任意SQL，不做参数替换"""
        conn = self._require_connection()
        async with conn.cursor(aiomysql.DictCursor) as cur:
            # args=None 时aiomysql不会处理SQL中的 % 字符
            await cur.execute(sql)
            if cur.description:
                rows = list(await cur.fetchall())
                return QueryResult(
                    rows=convert_rows_to_serializable(rows),
                    row_count=len(rows),
                    fields=[column[0] for column in cur.description],
                )
            return QueryResult(rows=[], row_count=max(cur.rowcount, 0), fields=[])


def _as_text(value: Any) -> Any:
    # mysql.user 的列在部分版本中以二进制返回
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return value
