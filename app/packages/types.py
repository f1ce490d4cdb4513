"""业务包接口定义：主应用只通过 ``AppPackage`` 访问业务包。"""

from __future__ import annotations

from dataclasses import dataclass
from logging import Logger
from typing import Callable, Optional

from fastapi import APIRouter


@dataclass(frozen=True)
class AppPackage:
    """业务包向 ``app.main`` 暴露的入口集合。

    ``startup_tasks`` 在 ``init_db`` 之后执行，例如启动期的目录索引。
    """

    name: str
    api_router: APIRouter
    get_settings: Callable[[], object]
    setup_logging: Callable[[], None]
    logger: Logger
    init_db: Callable[[], None]
    create_response: Callable[..., dict]
    http_exception_handler: Callable[..., object]
    generic_exception_handler: Callable[..., object]
    startup_tasks: tuple[Callable[[], Optional[object]], ...] = ()
