"""
用户API路由 - 列出、创建、删除数据库用户
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...types.core_types import ConnectionEntry
from ...utils.identifiers import validate_identifier
from ..dependencies import get_active_connection
from ..error_handlers import driver_errors

users_router = APIRouter()


class CreateUserRequest(BaseModel):
    """创建用户请求；host只对MySQL/MariaDB有意义，默认 %"""
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None


@users_router.get("/users")
async def list_users(entry: ConnectionEntry = Depends(get_active_connection)):
    """获取所有用户"""
    with driver_errors(entry.db_type.value, "list users"):
        users = await entry.adapter.list_users()
    return {"success": True, "users": users}


@users_router.post("/users")
async def create_user(
    request: CreateUserRequest,
    entry: ConnectionEntry = Depends(get_active_connection),
):
    """创建用户"""
    username = validate_identifier(
        request.username, "username",
        "Invalid username. Use only letters, numbers, and underscores."
    )
    with driver_errors(entry.db_type.value, "create user"):
        await entry.adapter.create_user(username, request.password or "", request.host or None)
    return {"success": True, "message": f"User '{username}' created successfully"}


@users_router.delete("/users/{username}")
async def delete_user(
    username: str,
    host: Optional[str] = None,
    entry: ConnectionEntry = Depends(get_active_connection),
):
    """删除用户"""
    validate_identifier(username, "username", "Invalid username")
    with driver_errors(entry.db_type.value, "drop user"):
        await entry.adapter.drop_user(username, host or None)
    return {"success": True, "message": f"User '{username}' deleted successfully"}
