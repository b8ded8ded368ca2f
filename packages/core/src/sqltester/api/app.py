"""
FastAPI应用创建和配置
会话cookie、CORS、路由注册和连接生命周期管理
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .. import __version__
from ..adapters.connection_manager import ConnectionRegistry
from ..config.base import ConsoleConfig
from ..telemetry.logger import get_logger
from .error_handlers import register_error_handlers

logger = get_logger(__name__)

SERVICE_NAME = "SQL Tester"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info(f"{SERVICE_NAME} API server started")

    yield

    # 退出前关闭所有会话的数据库连接
    await app.state.registry.close_all()
    logger.info(f"{SERVICE_NAME} API server stopped")


def create_app(
    config: Optional[ConsoleConfig] = None,
    registry: Optional[ConnectionRegistry] = None,
) -> FastAPI:
    """
    创建FastAPI应用

    参数:
        config: 配置，默认从环境变量和配置文件加载
        registry: 连接注册表，默认新建（测试时可注入）
    """
    config = config or ConsoleConfig()

    app = FastAPI(
        title=f"{SERVICE_NAME} API",
        description="Test connectivity to MySQL/MariaDB, PostgreSQL and SQLite, manage databases and users, run queries",
        version=__version__,
        lifespan=lifespan
    )
    app.state.config = config
    # 注册表定义了 __len__，空注册表为假值，不能用 or
    app.state.registry = registry if registry is not None else ConnectionRegistry()

    # 会话cookie，会话ID是连接注册表的键
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret,
        session_cookie=config.session_cookie,
        max_age=config.session_max_age,
        same_site="lax",
        https_only=False,
    )

    # 通配来源时不能携带凭据
    origins = config.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # 延迟导入路由以避免循环导入
    from .routes.connection import connection_router
    from .routes.database import database_router
    from .routes.users import users_router
    from .routes.query import query_router

    app.include_router(connection_router, prefix="/api", tags=["connection"])
    app.include_router(database_router, prefix="/api", tags=["databases"])
    app.include_router(users_router, prefix="/api", tags=["users"])
    app.include_router(query_router, prefix="/api", tags=["query"])

    # 控制台页面（可选）
    static_dir = config.static_dir
    if static_dir is not None:
        if static_dir.is_dir():
            app.mount("/ui", StaticFiles(directory=str(static_dir), html=True), name="ui")
        else:
            logger.warning(f"static_dir {static_dir} does not exist, console page disabled")

    # 健康检查
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": SERVICE_NAME}

    # 根路径
    @app.get("/")
    async def root():
        return {
            "message": f"{SERVICE_NAME} - database connection tester and admin console",
            "version": __version__,
            "docs": "/docs",
            "ui": "/ui" if static_dir is not None and static_dir.is_dir() else None,
        }

    return app
