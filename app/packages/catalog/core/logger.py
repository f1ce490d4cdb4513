"""日志配置模块：控制台彩色输出、按天轮转的文件日志，以及请求/扫描上下文注入。

每条日志都会带上两个上下文字段：
- ``request_id``：由 ``RequestIdMiddleware`` 在 HTTP 请求进入时写入；
- ``scan_id``：由 ``scan_context`` 在一次目录扫描期间写入，便于把同一次扫描的日志串起来。
"""

import json
import logging
import logging.config
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import Iterator, Optional

from .config import get_settings

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_scan_id_ctx: ContextVar[Optional[str]] = ContextVar("scan_id", default=None)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(scan_id)s] %(message)s"


class _LocalTimeFormatter(logging.Formatter):
    """按 ``TIMEZONE`` 渲染时间戳，未指定 datefmt 时输出毫秒级 ISO-8601。"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: D401
        moment = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return moment.strftime(datefmt)
        return moment.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(_LocalTimeFormatter):
    """按级别着色；输出目标不是终端时自动关闭颜色。"""

    RESET = "\033[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_colors: Optional[bool] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{text}{self.RESET}" if color else text


class JsonFormatter(_LocalTimeFormatter):
    """每行一个 JSON 对象，供日志采集使用。"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
            "scan_id": getattr(record, "scan_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class LogContextFilter(logging.Filter):
    """把当前上下文中的 request_id / scan_id 写入 LogRecord。"""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.request_id = _request_id_ctx.get()
        record.scan_id = _scan_id_ctx.get() or "-"
        return True


def setup_logging() -> None:
    """根据配置装载 dictConfig；应用、uvicorn 与根 logger 共用同一组 handler。"""
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)

    level = settings.log_level
    handlers = ["console", "file"]
    shared = {"handlers": handlers, "level": level, "propagate": False}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"context": {"()": "app.packages.catalog.core.logger.LogContextFilter"}},
            "formatters": {
                "color": {"()": "app.packages.catalog.core.logger.ColorFormatter", "fmt": LOG_FORMAT},
                "plain": {"()": "app.packages.catalog.core.logger._LocalTimeFormatter", "fmt": LOG_FORMAT},
                "json": {"()": "app.packages.catalog.core.logger.JsonFormatter"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "json" if settings.log_json else "color",
                    "filters": ["context"],
                },
                "file": {
                    "class": "logging.handlers.TimedRotatingFileHandler",
                    "level": level,
                    "formatter": "json" if settings.log_json else "plain",
                    "filename": str(settings.log_file_path),
                    "when": "midnight",
                    "backupCount": 14,
                    "encoding": "utf-8",
                    "delay": True,
                    "filters": ["context"],
                },
            },
            "loggers": {
                "app": dict(shared),
                "uvicorn": dict(shared),
                "uvicorn.error": dict(shared),
                "uvicorn.access": dict(shared),
            },
            "root": {"handlers": handlers, "level": level},
        }
    )


logger = logging.getLogger("app")


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id_ctx.get()


def get_scan_id() -> Optional[str]:
    return _scan_id_ctx.get()


@contextmanager
def scan_context(scan_id: Optional[str] = None) -> Iterator[str]:
    """在 with 块内为日志绑定扫描 ID，退出时恢复原值。"""
    value = scan_id or uuid.uuid4().hex[:8]
    token = _scan_id_ctx.set(value)
    try:
        yield value
    finally:
        _scan_id_ctx.reset(token)
