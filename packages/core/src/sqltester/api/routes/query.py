"""
查询API路由 - 原样执行用户输入的SQL
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...types.core_types import ConnectionEntry
from ...utils.errors import ValidationError
from ..dependencies import get_active_connection
from ..error_handlers import driver_errors

query_router = APIRouter()


class QueryRequest(BaseModel):
    """SQL执行请求"""
    query: Optional[str] = None


@query_router.post("/query")
async def execute_query(
    request: QueryRequest,
    entry: ConnectionEntry = Depends(get_active_connection),
):
    """执行SQL语句，不做任何改写或限制"""
    if not request.query or not request.query.strip():
        raise ValidationError("query", "Query cannot be empty")

    with driver_errors(entry.db_type.value, "query"):
        result = await entry.adapter.execute_query(request.query)

    return {"success": True, **result.to_dict()}
