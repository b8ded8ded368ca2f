"""
日志模块
"""

from .logger import get_logger, setup_logging, JsonFormatter, TextFormatter

__all__ = ["get_logger", "setup_logging", "JsonFormatter", "TextFormatter"]
