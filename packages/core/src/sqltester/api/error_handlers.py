"""
错误处理 - 把所有异常统一转换为 {success: false, message} 响应
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..telemetry.logger import get_logger
from ..utils.errors import ConsoleError, DriverError

logger = get_logger(__name__)


@contextmanager
def driver_errors(db_type: Optional[str] = None, operation: str = "") -> Iterator[None]:
    """
    把驱动抛出的任意异常转换为DriverError（500，保留驱动原始信息）
    已经是ConsoleError的异常原样抛出
    """
    try:
        yield
    except ConsoleError:
        raise
    except Exception as e:
        logger.warning(f"{db_type or 'driver'} {operation} failed: {e}")
        raise DriverError.from_exception(e, db_type=db_type) from e


async def console_error_handler(request: Request, exc: ConsoleError) -> JSONResponse:
    if exc.status_code >= 500 and not isinstance(exc, DriverError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求体格式错误（缺失字段、类型错误）按校验错误处理，返回400"""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        # 整个请求体缺失时loc只有 ("body",)
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = " ".join(part for part in (location, first.get("msg", "")) if part)
        if detail:
            message = f"{message}: {detail}"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConsoleError, console_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
