"""
应用启动入口
可以作为模块运行：python -m sqltester
"""

import argparse
import os
import sys
from pathlib import Path

from sqltester.config.base import ConsoleConfig
from sqltester.telemetry.logger import setup_logging


def load_env_file():
    """加载当前目录下.env文件中的环境变量（不覆盖已设置的变量）"""
    env_path = Path.cwd() / '.env'
    if not env_path.exists():
        return

    with open(env_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key not in os.environ:
                    os.environ[key] = value


def main():
    """主函数"""
    load_env_file()
    config = ConsoleConfig()

    parser = argparse.ArgumentParser(description="SQL Tester - database connection tester and admin console")
    parser.add_argument("--host", default=config.host, help="服务器主机地址")
    parser.add_argument("--port", type=int, default=config.port, help="服务器端口")
    parser.add_argument("--reload", action="store_true", help="开发模式（自动重载）")
    parser.add_argument("--log-level", default=config.log_level, help="日志级别")

    args = parser.parse_args()

    # 命令行参数优先于环境变量和配置文件
    os.environ["SQLTESTER_LOG_LEVEL"] = args.log_level.upper()
    config = ConsoleConfig()
    setup_logging(config)

    import uvicorn

    print(f"SQL Tester running at http://{args.host}:{args.port}")
    print("Supported databases: MySQL, MariaDB, PostgreSQL, SQLite")

    # 使用应用工厂，reload模式下子进程会重新创建应用
    uvicorn.run(
        "sqltester.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower()
    )


if __name__ == "__main__":
    main()
