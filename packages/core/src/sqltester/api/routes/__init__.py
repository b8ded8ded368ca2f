"""
API路由模块
"""

from .connection import connection_router
from .database import database_router
from .users import users_router
from .query import query_router

__all__ = ["connection_router", "database_router", "users_router", "query_router"]
