"""
连接API路由 - 测试连接、断开连接、查询当前连接状态
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from ...adapters.adapter_factory import list_supported_databases
from ...adapters.connection_manager import ConnectionRegistry
from ...types.core_types import ConnectionConfig, DbType
from ..dependencies import get_registry, get_session_id

connection_router = APIRouter()


class ConnectionRequest(BaseModel):
    """连接测试请求"""
    type: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None

    @field_validator("port", mode="before")
    @classmethod
    def _blank_port(cls, value: Any) -> Any:
        # 表单中未填写的端口以空字符串提交
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            host=self.host or None,
            port=self.port,
            username=self.username,
            password=self.password,
            database=self.database or None,
        )


@connection_router.post("/test-connection")
async def test_connection(
    request: ConnectionRequest,
    session_id: str = Depends(get_session_id),
    registry: ConnectionRegistry = Depends(get_registry),
):
    """测试数据库连接，成功后作为当前会话的连接保留"""
    db_type = DbType.parse(request.type)
    entry = await registry.open(session_id, db_type, request.to_config())

    return {
        "success": True,
        "message": "Connection successful!",
        "info": {
            "type": db_type.value,
            **entry.server_info,
        }
    }


@connection_router.post("/disconnect")
async def disconnect(
    session_id: str = Depends(get_session_id),
    registry: ConnectionRegistry = Depends(get_registry),
):
    """断开当前会话的连接"""
    await registry.close(session_id)
    return {"success": True, "message": "Disconnected successfully"}


@connection_router.get("/connection")
async def connection_status(
    session_id: str = Depends(get_session_id),
    registry: ConnectionRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """当前会话的连接状态，alive 表示连接是否仍能执行 SELECT 1"""
    entry = registry.get(session_id)
    if entry is None:
        return {"success": True, "connected": False}
    return {
        "success": True,
        "connected": True,
        "alive": await entry.adapter.health_check(),
        "info": entry.describe(),
    }


@connection_router.get("/drivers")
async def list_drivers():
    """已注册的数据库类型及驱动可用性"""
    return {"success": True, "drivers": list_supported_databases()}
