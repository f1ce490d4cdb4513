"""配置模块：从环境变量与 .env 文件加载目录服务的设置，并缓存为单例。"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """项目根目录：第一个包含 ``app`` 包的上级目录。"""
    here = Path(__file__).resolve()
    return next((parent for parent in here.parents if (parent / "app").is_dir()), here.parent)


PROJECT_ROOT = _find_project_root()


def _env_files() -> list[tuple[Path, bool]]:
    """按加载顺序返回 (文件, 是否覆盖已有变量)。

    ``ENV_FILE`` 指定时只加载该文件；否则先加载 ``.env``，
    再叠加 ``.env.<ENVIRONMENT>``（DEBUG 打开且未指定 ENVIRONMENT 时视为 development）。
    """
    override = os.getenv("ENV_FILE")
    if override:
        return [(PROJECT_ROOT / override, True)]

    files = [(PROJECT_ROOT / ".env", False)]
    environment = os.getenv("ENVIRONMENT")
    if environment is None and os.getenv("DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}:
        environment = "development"
    if environment:
        name = environment if environment.startswith(".env") else f".env.{environment}"
        files.append((PROJECT_ROOT / name, True))
    return files


for _path, _override in _env_files():
    if _path.exists():
        load_dotenv(_path, override=_override, encoding="utf-8")


class Settings(BaseSettings):
    """
    目录服务的全部配置项，字段别名即环境变量名。
    测试通过 ``DATABASE_URL`` 指向 SQLite，生产环境按 DB_* 拼接 PostgreSQL 连接串。
    """

    project_name: str = Field(default="Folder Catalog API", alias="PROJECT_NAME")
    api_prefix: str = Field(default="/api", alias="API_V1_STR")
    debug: bool = Field(default=False, alias="DEBUG")
    app_port: int = Field(default=4000, alias="APP_PORT")
    timezone: str = Field(default="UTC", alias="TIMEZONE")

    # 数据库
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    database_host: str = Field(default="localhost", alias="DB_HOST")
    database_port: int = Field(default=5432, alias="DB_PORT")
    database_user: str = Field(default="postgres", alias="DB_USER")
    database_password: str = Field(default="postgres", alias="DB_PASSWORD")
    database_name: str = Field(default="postgres", alias="DB_NAME")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    database_pool_size: int = Field(default=5, ge=1, alias="DB_POOL_SIZE")

    # 索引与隔离
    index_folder: str = Field(default="public", alias="INDEX_FOLDER")
    quarantine_dir_name: str = Field(default="_duplicates", min_length=1, alias="QUARANTINE_DIR_NAME")
    # all: 重复组成员全部隔离；keep_original: 组内恰有一个无副本标记的文件时保留它
    duplicate_policy: str = Field(default="all", alias="DUPLICATE_POLICY", pattern=r"^(all|keep_original)$")
    index_on_startup: bool = Field(default=True, alias="INDEX_ON_STARTUP")
    full_sync_on_startup: bool = Field(default=True, alias="FULL_SYNC_ON_STARTUP")
    served_prefix: str = Field(default="/served", alias="SERVED_PREFIX")

    # 日志
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="app.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    model_config = SettingsConfigDict(extra="ignore")

    @staticmethod
    def _under_project(raw: str) -> Path:
        path = Path(raw)
        return path if path.is_absolute() else PROJECT_ROOT / path

    @property
    def sql_database_url(self) -> str:
        """``DATABASE_URL`` 优先，否则拼接 PostgreSQL 连接串。"""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg2://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def index_root(self) -> Path:
        """被索引的根目录（绝对路径，已解析符号链接）。"""
        return self._under_project(self.index_folder).resolve()

    @property
    def log_directory(self) -> Path:
        return self._under_project(self.log_dir)

    @property
    def log_file_path(self) -> Path:
        return self.log_directory / self.log_file_name

    @property
    def timezone_info(self) -> ZoneInfo:
        """配置的时区；名称无法识别时回退到 UTC。"""
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError:
            return ZoneInfo("UTC")


@lru_cache
def get_settings() -> Settings:
    """返回缓存的配置对象。"""
    return Settings()
