"""
配置文件 - 引导程序自身的配置

这些配置不会进入发布的平台常量，只决定环境文件位置、平台内核的调用方式以及日志。
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_abspath() -> str:
    return str(Path.cwd()) + "/"


class Settings(BaseSettings):
    """引导程序配置"""

    PROJECT_NAME: str = Field(default="Multisite Bootstrap")
    VERSION: str = Field(default="1.0.0")
    # 仅影响日志；WP_DEBUG 始终发布为 false
    DEBUG: bool = Field(default=False)

    # CLI 模式下预加载的环境文件
    ENV_FILE: str = Field(default="/etc/server.env")

    # 平台内核
    ABSPATH: str = Field(
        default_factory=_default_abspath,
        description="平台内核安装根目录（ABSPATH 未绑定时使用）",
    )
    CORE_INTERPRETER: str = Field(default="php")
    CORE_ENTRYPOINT: str = Field(default="wp-settings.php")
    CORE_APP: Optional[str] = Field(
        default=None,
        description="请求模式下内核 ASGI 应用的导入路径（module:attribute）",
    )

    # 连通性检查（`check --ping`）
    PING_TIMEOUT: float = Field(default=5.0)

    model_config = SettingsConfigDict(
        env_prefix="BOOTSTRAP_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("ABSPATH")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        if v and not v.endswith("/"):
            return v + "/"
        return v

    @property
    def core_entry_path(self) -> str:
        return self.ABSPATH + self.CORE_ENTRYPOINT


settings = Settings()
