"""
数据库API路由 - 列出、创建、删除数据库
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...types.core_types import ConnectionEntry
from ...utils.identifiers import validate_identifier
from ..dependencies import get_active_connection
from ..error_handlers import driver_errors

database_router = APIRouter()


class CreateDatabaseRequest(BaseModel):
    """创建数据库请求"""
    name: Optional[str] = None


@database_router.get("/databases")
async def list_databases(entry: ConnectionEntry = Depends(get_active_connection)):
    """获取所有数据库"""
    with driver_errors(entry.db_type.value, "list databases"):
        databases = await entry.adapter.list_databases()
    return {"success": True, "databases": databases}


@database_router.post("/databases")
async def create_database(
    request: CreateDatabaseRequest,
    entry: ConnectionEntry = Depends(get_active_connection),
):
    """创建数据库"""
    name = validate_identifier(
        request.name, "name",
        "Invalid database name. Use only letters, numbers, and underscores."
    )
    with driver_errors(entry.db_type.value, "create database"):
        await entry.adapter.create_database(name)
    return {"success": True, "message": f"Database '{name}' created successfully"}


@database_router.delete("/databases/{name}")
async def delete_database(
    name: str,
    entry: ConnectionEntry = Depends(get_active_connection),
):
    """删除数据库"""
    validate_identifier(name, "name", "Invalid database name")
    with driver_errors(entry.db_type.value, "drop database"):
        await entry.adapter.drop_database(name)
    return {"success": True, "message": f"Database '{name}' deleted successfully"}
