"""
DataAdapter基类 - 数据库适配器基础接口
每种数据库一个实现，在连接打开时选定，之后所有操作通过统一接口分发
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..types.core_types import ConnectionConfig, DbType, QueryResult
from ..utils.errors import UnsupportedOperationError


class DataAdapter(ABC):
    """
    数据库适配器基类
    - 连接生命周期（connect / disconnect）
    - 库和用户管理
    - 任意SQL执行
    适配器独占底层驱动句柄，只由连接注册表持有
    """

    db_type: DbType

    def __init__(self, config: ConnectionConfig, db_type: Optional[DbType] = None):
        self.config = config
        if db_type is not None:
            self.db_type = db_type
        self.connection: Any = None

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    @abstractmethod
    async def connect(self) -> None:
        """建立数据库连接，成功后丢弃密码"""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """关闭数据库连接"""
        pass

    @abstractmethod
    async def get_server_info(self) -> Dict[str, Any]:
        """连接测试返回的信息（版本号或数据库路径）"""
        pass

    @abstractmethod
    async def list_databases(self) -> List[str]:
        pass

    @abstractmethod
    async def create_database(self, name: str) -> None:
        pass

    @abstractmethod
    async def drop_database(self, name: str) -> None:
        pass

    @abstractmethod
    async def list_users(self) -> List[Dict[str, str]]:
        """返回 [{user, host}]"""
        pass

    @abstractmethod
    async def create_user(self, username: str, password: str, host: Optional[str] = None) -> None:
        pass

    @abstractmethod
    async def drop_user(self, username: str, host: Optional[str] = None) -> None:
        pass

    @abstractmethod
    async def execute_query(self, sql: str) -> QueryResult:
        """原样执行SQL，返回行、行数和字段名"""
        pass

    async def health_check(self) -> bool:
        """连接健康检查"""
        try:
            await self.execute_query("SELECT 1")
            return True
        except Exception:
            return False

    def _forget_password(self) -> None:
        self.config = self.config.without_password()

    def _require_connection(self) -> Any:
        if self.connection is None:
            raise RuntimeError(f"{self.db_type.value} adapter is not connected")
        return self.connection

    def _unsupported(self, operation: str, message: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(self.db_type.value, operation, message)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} type={self.db_type.value} connected={self.is_connected}>"
