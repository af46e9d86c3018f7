from .app_config import AppConfig
from .log_config import LogConfig
from .defaults_config import RunDefaults
from .tree_type import TreeType
from .run_config import RunConfiguration

__all__ = ["AppConfig", "LogConfig", "RunDefaults", "TreeType", "RunConfiguration"]
