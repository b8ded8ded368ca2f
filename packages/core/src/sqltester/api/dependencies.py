"""
API依赖项 - 提供依赖注入的函数
配置和连接注册表挂在 app.state 上，由 create_app 设置
"""

import uuid

from fastapi import Depends, Request

from ..adapters.connection_manager import ConnectionRegistry
from ..config.base import ConsoleConfig
from ..types.core_types import ConnectionEntry
from ..utils.errors import ConfigurationError, NoActiveConnectionError

SESSION_KEY = "session_id"


def get_config(request: Request) -> ConsoleConfig:
    """获取配置实例"""
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise ConfigurationError("config", "Configuration not initialized")
    return config


def get_registry(request: Request) -> ConnectionRegistry:
    """获取连接注册表"""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise ConfigurationError("registry", "Connection registry not initialized")
    return registry


def get_session_id(request: Request) -> str:
    """
    获取当前会话ID
    首次访问时生成，保存在签名cookie中
    """
    session_id = request.session.get(SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[SESSION_KEY] = session_id
    return session_id


def get_active_connection(
    session_id: str = Depends(get_session_id),
    registry: ConnectionRegistry = Depends(get_registry),
) -> ConnectionEntry:
    """获取当前会话的活动连接，不存在时返回 "No active connection" 错误"""
    entry = registry.get(session_id)
    if entry is None:
        raise NoActiveConnectionError()
    return entry
