#!filepath: tracedoc/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .render_config import RenderConfig
from tracedoc.utils.logger import logs


def project_root() -> str:
    """
    返回包根目录（基于当前文件位置推导）:
    tracedoc/config/app_config.py → tracedoc/config → tracedoc
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 tracedoc/config/base.yml
        - TRACEDOC_CONFIG 环境变量可覆盖默认路径
        - 不依赖当前工作目录
        """
        root = project_root()

        # 1) 先加载 .env（当前目录优先，其次包根目录的上一级）
        load_dotenv()
        load_dotenv(os.path.join(root, "..", ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = os.getenv("TRACEDOC_CONFIG") or os.path.join(root, "config", "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 环境变量覆盖日志级别
        level = os.getenv("TRACEDOC_LOG_LEVEL")
        if level:
            raw.setdefault("log", {})["level"] = level

        logs.debug(f"[Config] loaded {path}")
        return cls(**raw)
