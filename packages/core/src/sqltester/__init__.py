"""
SQL Tester - 数据库连接测试和管理控制台
导出主要API供外部使用
"""

__version__ = "1.0.0"

# 适配器和连接注册表
from .adapters import DataAdapter, ConnectionRegistry, create_adapter, register_adapter

# 配置
from .config.base import ConsoleConfig

# 类型定义
from .types.core_types import DbType, ConnectionConfig, ConnectionEntry, QueryResult

# 异常
from .utils.errors import (
    ConsoleError,
    ValidationError,
    NoActiveConnectionError,
    UnsupportedOperationError,
    DriverError,
    ConnectionFailedError,
)

# API
from .api.app import create_app

__all__ = [
    # 适配器
    "DataAdapter",
    "ConnectionRegistry",
    "create_adapter",
    "register_adapter",

    # 配置
    "ConsoleConfig",

    # 类型
    "DbType",
    "ConnectionConfig",
    "ConnectionEntry",
    "QueryResult",

    # 异常
    "ConsoleError",
    "ValidationError",
    "NoActiveConnectionError",
    "UnsupportedOperationError",
    "DriverError",
    "ConnectionFailedError",

    # API
    "create_app",
]
