from .options import OPTIONS, Arity, InfoRequest, OptionSpec
from .outcome import OutcomeKind, ParseOutcome
from .scanner import OptionScanner, ScanResult
from .validator import ConsistencyValidator
from .pipeline import ArgsPipeline, build_args_pipeline, parse_arguments

__all__ = [
    "OPTIONS", "Arity", "InfoRequest", "OptionSpec",
    "OutcomeKind", "ParseOutcome",
    "OptionScanner", "ScanResult",
    "ConsistencyValidator",
    "ArgsPipeline", "build_args_pipeline", "parse_arguments",
]
