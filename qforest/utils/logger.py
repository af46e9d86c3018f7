#!filepath: qforest/utils/logger.py
import os
import sys
import json
from functools import wraps
from time import perf_counter
from typing import TYPE_CHECKING, Callable, Optional

from loguru import logger

if TYPE_CHECKING:
    from qforest.config.log_config import LogConfig


class Logging:
    """
    命令行日志模块
    ---------------------------------------
    - stderr sink，级别由 --verbose 控制
    - 可选文件 sink（按日期切割 + 保留周期）
    - 包含函数级日志装饰器
    ---------------------------------------

    解析阶段不写文件：只有 log_dir 显式设置时才添加文件 sink。
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "WARNING",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        self._configure()

    def _configure(self) -> None:
        logger.remove()

        logger.add(
            sys.stderr,
            level=self.level,
            format="{time:HH:mm:ss} | {level} | {message}",
            backtrace=False,
            diagnose=False,
        )

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,
                backtrace=True,
                diagnose=True,
            )

        logger.debug(f"[Logging] configured level={self.level} dir={self.log_dir}")

    def reconfigure(
        self,
        *,
        log_dir: Optional[str] = None,
        rotation: Optional[str] = None,
        retention: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.log_dir = log_dir
        if rotation is not None:
            self.rotation = rotation
        if retention is not None:
            self.retention = retention
        if log_level is not None:
            self.level = log_level
        self._configure()

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_outputs: bool = False,
        log_time: bool = True,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.debug(
                        f"[CALL] {func.__name__} args={args}, kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_outputs:
                    logger.debug(f"[RETURN] {func.__name__} result={result}")

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(cfg: "LogConfig", *, verbose: bool = False) -> Logging:
    """
    按 LogConfig 重新配置全局 logs。--verbose 将 stderr 级别降到 DEBUG。
    """
    logs.reconfigure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level="DEBUG" if verbose else cfg.level,
    )
    return logs


# 默认全局 logs（可被 init_logging 替换）
logs = Logging()
