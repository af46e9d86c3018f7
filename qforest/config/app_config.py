#!filepath: qforest/config/app_config.py
import os
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .defaults_config import RunDefaults


def package_config_path() -> str:
    """
    默认配置文件路径（随包安装）:
    qforest/config/app_config.py → qforest/config/base.yml
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


# 环境变量覆盖（.env 或进程环境）
_ENV_OVERRIDES = {
    "QFOREST_LOG_LEVEL": ("log", "level"),
    "QFOREST_LOG_DIR": ("log", "dir"),
    "QFOREST_NUM_THREADS": ("defaults", "num_threads"),
}


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    defaults: RunDefaults = Field(default_factory=RunDefaults)

    @classmethod
    def load(cls, path: Optional[str] = None, env_file: Optional[str] = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 qforest/config/base.yml
        - .env 默认从当前工作目录读取（不存在则忽略）
        - QFOREST_* 环境变量覆盖 YAML
        """
        # 1) 先加载 .env
        load_dotenv(env_file or os.path.join(os.getcwd(), ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = package_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 从 env 注入覆盖
        for var, (section, key) in _ENV_OVERRIDES.items():
            value = os.getenv(var)
            if value:
                raw[section] = dict(raw.get(section) or {})
                raw[section][key] = value

        return cls(**raw)
