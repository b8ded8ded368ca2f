"""
核心类型定义
数据库类型、连接参数、会话连接记录和查询结果
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..utils.errors import ValidationError

if TYPE_CHECKING:
    from ..adapters.base import DataAdapter


class DbType(str, Enum):
    """支持的数据库类型"""
    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DbType":
        """解析客户端传入的类型字符串（大小写不敏感）"""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise ValidationError("type", "Unsupported database type", invalid_value=value)


SQLITE_MEMORY = ":memory:"


@dataclass
class ConnectionConfig:
    """
    连接参数
    password只在建立连接时使用，之后通过without_password()丢弃
    """
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None

    def without_password(self) -> "ConnectionConfig":
        return replace(self, password=None)

    def to_public_dict(self) -> Dict[str, Any]:
        """可返回给客户端的连接信息（不含密码）"""
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "database": self.database,
        }


@dataclass
class QueryResult:
    """单次查询结果，仅在请求期间存在"""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "rowCount": self.row_count,
            "fields": self.fields,
        }


@dataclass
class ConnectionEntry:
    """连接注册表中一个会话的记录"""
    session_id: str
    db_type: DbType
    adapter: "DataAdapter"
    config: ConnectionConfig
    server_info: Dict[str, Any] = field(default_factory=dict)
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def describe(self) -> Dict[str, Any]:
        """会话连接状态描述"""
        return {
            "type": self.db_type.value,
            **self.config.to_public_dict(),
            **self.server_info,
            "connected_at": self.connected_at.isoformat(),
        }
