#!filepath: tests/config/test_app_config.py
import os

import yaml
import pytest

from qforest.config import AppConfig
from qforest.config.log_config import LogConfig
from qforest.config.defaults_config import RunDefaults


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ["QFOREST_LOG_LEVEL", "QFOREST_LOG_DIR", "QFOREST_NUM_THREADS"]:
        monkeypatch.delenv(key, raising=False)
    # no stray .env from the working directory
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_config_file(tmp_path):
    """
    创建临时 YAML 配置文件用于测试，
    pytest 会自动清理该目录。
    """
    data = {
        "log": {
            "dir": None,
            "rotation": "1 day",
            "retention": "7 days",
            "level": "DEBUG",
        },
        "defaults": {
            "num_trees": 250,
            "num_threads": 3,
        },
    }

    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_app_config_load(sample_config_file):
    """测试 AppConfig 是否能正确加载 YAML"""
    cfg = AppConfig.load(path=str(sample_config_file))

    assert isinstance(cfg, AppConfig)
    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.defaults, RunDefaults)
    assert cfg.log.level == "DEBUG"
    assert cfg.log.retention == "7 days"
    assert cfg.defaults.num_trees == 250
    assert cfg.defaults.resolve_num_threads() == 3


def test_packaged_base_config():
    """包内 base.yml：stderr only，ntree=500，线程数取 CPU 数"""
    cfg = AppConfig.load()
    assert cfg.log.dir is None
    assert cfg.log.level == "WARNING"
    assert cfg.defaults.num_trees == 500
    assert cfg.defaults.num_threads is None
    assert cfg.defaults.resolve_num_threads() >= 1


def test_env_overrides(sample_config_file, monkeypatch):
    monkeypatch.setenv("QFOREST_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("QFOREST_NUM_THREADS", "8")
    cfg = AppConfig.load(path=str(sample_config_file))
    assert cfg.log.level == "ERROR"
    assert cfg.defaults.num_threads == 8


def test_dotenv_file_is_loaded(sample_config_file, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("QFOREST_NUM_THREADS=6\n", encoding="utf-8")
    try:
        cfg = AppConfig.load(path=str(sample_config_file), env_file=str(env_file))
        assert cfg.defaults.num_threads == 6
    finally:
        os.environ.pop("QFOREST_NUM_THREADS", None)


def test_missing_file_should_fail(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "missing.yml"))


def test_invalid_defaults_should_fail(tmp_path):
    """num_trees < 1 时应抛出 ValidationError"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text(yaml.safe_dump({"defaults": {"num_trees": 0}}))

    with pytest.raises(Exception):
        AppConfig.load(path=str(bad_file))
