"""
标识符校验 - 数据库名和用户名在进入驱动之前的唯一防注入手段
只允许字母、数字和下划线
"""

import re
from typing import Optional

from .errors import ValidationError

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def is_valid_identifier(name: Optional[str]) -> bool:
    """判断名称是否为合法标识符"""
    # fullmatch 防止 "$" 匹配末尾换行符
    return bool(name) and IDENTIFIER_PATTERN.fullmatch(name) is not None


def validate_identifier(name: Optional[str], field_name: str, message: str) -> str:
    """
    校验标识符，不合法时抛出ValidationError

    参数:
        name: 待校验的名称
        field_name: 请求中的字段名（用于错误详情）
        message: 返回给客户端的错误信息
    """
    if not is_valid_identifier(name):
        raise ValidationError(field_name, message, invalid_value=name)
    return name


def quote_literal(value: str) -> str:
    """SQL字符串字面量转义（单引号加倍）"""
    return "'" + value.replace("'", "''") + "'"
