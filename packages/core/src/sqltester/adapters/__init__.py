"""
数据库适配器系统 - 支持MySQL、MariaDB、PostgreSQL、SQLite
提供统一的数据库操作接口和会话连接注册表
"""

from .base import DataAdapter
from .adapter_factory import create_adapter, register_adapter, list_supported_databases
from .connection_manager import ConnectionRegistry

__all__ = [
    "DataAdapter",
    "ConnectionRegistry",
    "create_adapter",
    "register_adapter",
    "list_supported_databases",
]
