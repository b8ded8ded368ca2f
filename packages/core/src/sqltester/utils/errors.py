"""
自定义异常类 - 提供结构化的错误处理
每个异常携带对应的HTTP状态码，由API层统一转换为 {success: false, message} 响应
"""

from typing import Optional, Dict, Any


class ConsoleError(Exception):
    """控制台基础异常类"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details
        }

    def to_response(self) -> Dict[str, Any]:
        """转换为API响应信封"""
        return {"success": False, "message": self.message}


class ValidationError(ConsoleError):
    """参数验证异常（非法标识符、缺失字段等），在调用驱动之前抛出"""

    status_code = 400

    def __init__(
        self,
        field_name: str,
        message: str,
        invalid_value: Any = None,
        **kwargs
    ):
        kwargs.setdefault("error_code", "VALIDATION_ERROR")
        super().__init__(message, **kwargs)
        self.field_name = field_name
        self.invalid_value = invalid_value

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "field_name": self.field_name,
            "invalid_value": self.invalid_value
        })
        return result


class NoActiveConnectionError(ConsoleError):
    """当前会话没有活动连接"""

    status_code = 400

    def __init__(self, message: str = "No active connection", **kwargs):
        kwargs.setdefault("error_code", "NO_ACTIVE_CONNECTION")
        super().__init__(message, **kwargs)


class UnsupportedOperationError(ConsoleError):
    """数据库类型不支持该操作（例如SQLite没有用户管理）"""

    status_code = 400

    def __init__(
        self,
        db_type: str,
        operation: str,
        message: str,
        **kwargs
    ):
        kwargs.setdefault("error_code", "UNSUPPORTED_OPERATION")
        super().__init__(message, **kwargs)
        self.db_type = db_type
        self.operation = operation

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "db_type": self.db_type,
            "operation": self.operation
        })
        return result


class DriverError(ConsoleError):
    """底层数据库驱动抛出的异常，消息保持驱动原文"""

    status_code = 500

    def __init__(
        self,
        message: str,
        db_type: Optional[str] = None,
        original_error: Optional[Exception] = None,
        **kwargs
    ):
        kwargs.setdefault("error_code", "DRIVER_ERROR")
        super().__init__(message, **kwargs)
        self.db_type = db_type
        self.original_error = original_error

    @classmethod
    def from_exception(cls, error: Exception, db_type: Optional[str] = None) -> "DriverError":
        return cls(str(error) or error.__class__.__name__, db_type=db_type, original_error=error)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "db_type": self.db_type,
            "original_error": repr(self.original_error) if self.original_error else None
        })
        return result


class ConnectionFailedError(DriverError):
    """打开数据库连接失败"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "CONNECTION_FAILED")
        super().__init__(f"Connection failed: {message}", **kwargs)


class ConfigurationError(ConsoleError):
    """配置异常"""

    def __init__(
        self,
        config_key: str,
        message: str,
        **kwargs
    ):
        kwargs.setdefault("error_code", "CONFIGURATION_ERROR")
        super().__init__(message, **kwargs)
        self.config_key = config_key

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "config_key": self.config_key
        })
        return result
