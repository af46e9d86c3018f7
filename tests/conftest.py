# tests/conftest.py
from __future__ import annotations

from typing import List

import pytest
from loguru import logger

from qforest.config.app_config import AppConfig
from qforest.config.defaults_config import RunDefaults


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def log_messages():
    """
    收集 loguru 输出（WARNING 及以上），用于断言 leftover 报告等。
    """
    messages: List[str] = []
    sink_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="WARNING")
    yield messages
    try:
        logger.remove(sink_id)
    except ValueError:
        pass


@pytest.fixture
def defaults() -> RunDefaults:
    # fixed thread count so tests do not depend on the host CPU count
    return RunDefaults(num_trees=500, num_threads=4)


@pytest.fixture
def app_config(defaults) -> AppConfig:
    return AppConfig(defaults=defaults)


@pytest.fixture
def base_argv() -> List[str]:
    return ["--file", "in.csv", "--depvarname", "y"]
