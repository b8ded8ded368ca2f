"""
数据库适配器工厂 - 按数据库类型创建适配器
类型分发只在这里发生一次；新增数据库只需 register_adapter
"""

import importlib
from typing import Any, Callable, Dict, Optional, Tuple, Type

from .base import DataAdapter
from ..types.core_types import ConnectionConfig, DbType
from ..telemetry.logger import get_logger
from ..utils.errors import ValidationError

logger = get_logger(__name__)

AdapterFactory = Callable[[DbType, ConnectionConfig], DataAdapter]

# 适配器注册表
_adapter_registry: Dict[str, Type[DataAdapter]] = {}

# 适配器对应的驱动包（import名）
_driver_modules: Dict[str, str] = {}


def register_adapter(db_type: str, adapter_class: Type[DataAdapter],
                     driver_module: Optional[str] = None):
    """
    注册数据库适配器

    Args:
        db_type: 数据库类型标识
        adapter_class: 适配器类
        driver_module: 驱动的import名称，用于检查驱动是否可用
    """
    _adapter_registry[db_type] = adapter_class
    if driver_module:
        _driver_modules[db_type] = driver_module


def _check_driver_available(db_type: str) -> Tuple[bool, str]:
    """
    检查数据库驱动是否可用

    Returns:
        (是否可用, 错误信息或建议)
    """
    module_name = _driver_modules.get(db_type)
    if not module_name:
        return True, ""
    try:
        importlib.import_module(module_name)
        return True, ""
    except ImportError:
        return False, f"Driver for {db_type} not found. Install with: pip install {module_name}"


def create_adapter(db_type: DbType, config: ConnectionConfig) -> DataAdapter:
    """
    创建（未连接的）适配器实例
    """
    adapter_class = _adapter_registry.get(db_type.value)
    if adapter_class is None:
        raise ValidationError("type", "Unsupported database type", invalid_value=db_type.value)
    return adapter_class(config, db_type)


def list_supported_databases() -> Dict[str, Dict[str, Any]]:
    """
    列出所有已注册的数据库类型及驱动状态
    """
    result = {}
    for db_type in DbType:
        registered = db_type.value in _adapter_registry
        available, message = _check_driver_available(db_type.value) if registered else (False, "")
        result[db_type.value] = {
            "registered": registered,
            "driver_available": available,
            "message": message if registered else f"No adapter registered for {db_type.value}",
        }
    return result


def _register_builtin_adapters() -> None:
    """注册内置适配器；驱动未安装时跳过对应类型"""
    try:
        from .sqlite_adapter import SQLiteAdapter
        register_adapter(DbType.SQLITE.value, SQLiteAdapter, "aiosqlite")
    except ImportError as e:
        logger.warning(f"SQLite adapter unavailable: {e}")

    try:
        from .mysql_adapter import MySQLAdapter
        register_adapter(DbType.MYSQL.value, MySQLAdapter, "aiomysql")
        register_adapter(DbType.MARIADB.value, MySQLAdapter, "aiomysql")
    except ImportError as e:
        logger.warning(f"MySQL/MariaDB adapter unavailable: {e}")

    try:
        from .postgresql_adapter import PostgreSQLAdapter
        register_adapter(DbType.POSTGRESQL.value, PostgreSQLAdapter, "asyncpg")
    except ImportError as e:
        logger.warning(f"PostgreSQL adapter unavailable: {e}")


_register_builtin_adapters()
