"""
Web API模块 - FastAPI应用和路由
"""

from .app import create_app

__all__ = ["create_app"]
