"""业务包注册表：``app.main`` 通过 ``APP_ACTIVE_PACKAGE`` 选择要挂载的业务包。

当前只有目录服务 ``catalog`` 一个业务包，也是默认值。
"""

from __future__ import annotations

import os
from typing import Dict

from . import catalog
from .types import AppPackage

DEFAULT_PACKAGE = catalog.package.name

PACKAGE_REGISTRY: Dict[str, AppPackage] = {pkg.name: pkg for pkg in (catalog.package,)}


def get_active_package() -> AppPackage:
    name = os.getenv("APP_ACTIVE_PACKAGE", DEFAULT_PACKAGE)
    package = PACKAGE_REGISTRY.get(name)
    if package is None:
        raise RuntimeError(f"未知的业务包 '{name}'，可用选项：{', '.join(sorted(PACKAGE_REGISTRY))}")
    return package


__all__ = ["catalog", "DEFAULT_PACKAGE", "PACKAGE_REGISTRY", "get_active_package"]
