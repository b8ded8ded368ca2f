"""
ConnectionRegistry - 会话连接注册表
会话ID到活动数据库连接的映射，每个会话至多一个连接
"""

from typing import Dict, Optional

from .adapter_factory import AdapterFactory, create_adapter
from .base import DataAdapter
from ..types.core_types import ConnectionConfig, ConnectionEntry, DbType
from ..telemetry.logger import get_logger
from ..utils.errors import ConnectionFailedError, ConsoleError

logger = get_logger(__name__)


class ConnectionRegistry:
    """
    会话连接注册表
    - open: 新连接成功后才替换旧连接，失败时不修改注册表
    - close: 关闭并移除，关闭错误只记录不抛出
    - get: 只读查找
    注册表是适配器的唯一持有者
    """

    def __init__(self, adapter_factory: AdapterFactory = create_adapter):
        self._adapter_factory = adapter_factory
        self._entries: Dict[str, ConnectionEntry] = {}

    async def open(self, session_id: str, db_type: DbType, config: ConnectionConfig) -> ConnectionEntry:
        """
        为会话打开新连接

        参数:
            session_id: 会话ID
            db_type: 数据库类型
            config: 连接参数（含密码，连接成功后不再保留）

        返回:
            新的ConnectionEntry
        """
        adapter = self._adapter_factory(db_type, config)
        try:
            await adapter.connect()
            server_info = await adapter.get_server_info()
        except ConsoleError:
            await self._release(adapter, session_id)
            raise
        except Exception as e:
            logger.warning(f"Connection attempt failed for session {session_id[:8]} ({db_type.value}): {e}")
            await self._release(adapter, session_id)
            raise ConnectionFailedError.from_exception(e, db_type=db_type.value)

        # 新连接已就绪，关闭旧连接后再登记
        await self.close(session_id)
        # 等待关闭期间同一会话的另一次open可能已经登记
        while session_id in self._entries:
            await self.close(session_id)

        entry = ConnectionEntry(
            session_id=session_id,
            db_type=db_type,
            adapter=adapter,
            config=adapter.config.without_password(),
            server_info=server_info,
        )
        self._entries[session_id] = entry
        logger.info(f"Session {session_id[:8]} connected to {db_type.value}")
        return entry

    async def close(self, session_id: str) -> None:
        """关闭并移除会话连接，不存在时什么都不做"""
        entry = self._entries.pop(session_id, None)
        if entry is None:
            return
        await self._release(entry.adapter, session_id)
        logger.info(f"Session {session_id[:8]} disconnected from {entry.db_type.value}")

    def get(self, session_id: str) -> Optional[ConnectionEntry]:
        return self._entries.get(session_id)

    async def close_all(self) -> None:
        """关闭所有连接（进程退出时调用）"""
        session_ids = list(self._entries.keys())
        for session_id in session_ids:
            await self.close(session_id)
        if session_ids:
            logger.info(f"Closed {len(session_ids)} connection(s)")

    async def _release(self, adapter: DataAdapter, session_id: str) -> None:
        try:
            await adapter.disconnect()
        except Exception as e:
            logger.error(f"Error closing {adapter.db_type.value} connection for session {session_id[:8]}: {e}")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._entries
