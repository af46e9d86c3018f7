#!filepath: qforest/__init__.py

__version__ = "0.1.0"

from .utils.logger import Logging, logs, init_logging
from .config.app_config import AppConfig
from .args.pipeline import parse_arguments
from .args.outcome import OutcomeKind, ParseOutcome

__all__ = [
    "__version__",
    "logs", "Logging", "init_logging",
    "AppConfig",
    "parse_arguments",
    "OutcomeKind", "ParseOutcome",
]
