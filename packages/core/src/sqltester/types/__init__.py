"""
类型定义模块
"""

from .core_types import (
    DbType,
    ConnectionConfig,
    ConnectionEntry,
    QueryResult,
    SQLITE_MEMORY,
)

__all__ = [
    "DbType",
    "ConnectionConfig",
    "ConnectionEntry",
    "QueryResult",
    "SQLITE_MEMORY",
]
