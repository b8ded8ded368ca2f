"""
类型转换工具 - 处理数据库返回的特殊类型
确保查询结果中的每个值都能被JSON序列化后返回给浏览器
"""

from decimal import Decimal
from datetime import datetime, date, time, timedelta
from typing import Any, Dict, Iterable, List, Mapping
from uuid import UUID
import json
import math


def convert_to_serializable(value: Any) -> Any:
    """
    将数据库返回的特殊类型转换为可序列化的基本类型

    支持的转换：
    - Decimal -> 整数值保持int，否则float
    - 非有限数（inf/nan，包括Decimal）-> None
    - datetime/date/time -> ISO格式字符串
    - timedelta（MySQL TIME列）-> 秒数
    - UUID（PostgreSQL uuid列）-> 字符串
    - bytes/memoryview -> UTF-8字符串，解码失败时转十六进制
    - 嵌套的映射和序列递归处理
    """
    if isinstance(value, float):
        # JSON没有Infinity/NaN，和JSON.stringify一样输出null
        return value if math.isfinite(value) else None

    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value == value.to_integral_value():
            return int(value)
        return float(value)

    # datetime 是 date 的子类，需先判断
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    if isinstance(value, timedelta):
        return value.total_seconds()

    if isinstance(value, UUID):
        return str(value)

    if isinstance(value, memoryview):
        value = value.tobytes()

    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode('utf-8')
        except UnicodeDecodeError:
            return bytes(value).hex()

    if isinstance(value, Mapping):
        return {str(k): convert_to_serializable(v) for k, v in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        return [convert_to_serializable(item) for item in value]

    # 其他类型（如asyncpg的Range、几何类型）
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


def convert_row_to_serializable(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    转换单行数据，保持字段顺序
    """
    return {key: convert_to_serializable(value) for key, value in row.items()}


def convert_rows_to_serializable(rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    转换多行数据（asyncpg Record、aiosqlite Row转dict后、aiomysql DictCursor结果）
    """
    return [convert_row_to_serializable(row) for row in rows]
