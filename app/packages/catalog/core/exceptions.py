"""异常定义与全局异常处理。

- ``AppException``：接口层业务错误，由全局处理器转换为 ``{msg, data, code}``；
- ``ScanError`` 系列：扫描流程错误，由调用方（接口或启动任务）决定如何呈现；
- ``PathOutsideRootError``：路径越出索引根目录。
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.catalog.core.logger import get_request_id, logger


class AppException(HTTPException):
    """业务异常：``msg`` 作为响应消息，``data`` 原样放入响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class ScanError(Exception):
    """扫描流程异常基类。"""


class ScanSetupError(ScanError):
    """隔离目录无法创建或根目录无法枚举，整次扫描失败。"""


class ScanInProgressError(ScanError):
    """已有扫描在执行时再次触发扫描。"""


class PathOutsideRootError(ValueError):
    """路径不在索引根目录之下。"""


def _error_body(msg, code: int, data=None) -> dict:
    body = {"msg": msg, "data": data, "code": code}
    request_id = get_request_id()
    if request_id:
        body["meta"] = {"request_id": request_id}
    return body


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    body = _error_body(exc.detail, exc.status_code, getattr(exc, "data", None))
    return JSONResponse(status_code=exc.status_code, content=body)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底：未捕获异常记录堆栈并返回 500。"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = _error_body("服务器内部错误", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
