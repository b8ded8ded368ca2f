"""
日志系统 - 结构化日志
支持文本和JSON两种格式，输出到控制台和可选的日志文件
"""

import json
import logging
import sys
from datetime import datetime
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config.base import ConsoleConfig

ROOT_LOGGER_NAME = "sqltester"

# LogRecord 的标准属性，JSON格式化时不作为额外字段输出
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'exc_info', 'exc_text', 'stack_info',
    'message', 'asctime', 'service',
])


def get_logger(name: str) -> logging.Logger:
    """
    获取标准日志器

    Args:
        name: 日志器名称（通常为 __name__，位于 sqltester 命名空间下）

    Returns:
        标准 Python 日志器
    """
    return logging.getLogger(name)


def setup_logging(config: "ConsoleConfig", service_name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    根据配置设置 sqltester 日志器
    重复调用时会替换已有的处理器
    """
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if config.log_format == "json":
        formatter: logging.Formatter = JsonFormatter(service_name)
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file: Optional[str] = config.log_file
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class JsonFormatter(logging.Formatter):
    """JSON格式化器 - 每条日志一行JSON"""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", self.service_name),
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # extra= 传入的自定义字段
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """文本格式化器 - 人类可读的日志格式"""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
