# qforest/args/validator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from qforest import logs
from qforest.config.run_config import RunConfiguration
from qforest.config.tree_type import TreeType
from qforest.utils.errors import (
    HELP_HINT,
    ConfigValidationError,
    MissingRequiredFieldError,
    MutualExclusionError,
)


@dataclass(frozen=True)
class ConsistencyRule:
    name: str
    violated: Callable[[RunConfiguration], bool]
    error: Callable[[], ConfigValidationError]


def _instrumental(config: RunConfiguration) -> bool:
    return config.tree_type is TreeType.INSTRUMENTAL


# Order is part of the contract: the first violated rule is reported.
RULES: Tuple[ConsistencyRule, ...] = (
    ConsistencyRule(
        "input_file",
        lambda c: not c.input_file,
        lambda: MissingRequiredFieldError(
            f"Please specify an input filename with '--file'. {HELP_HINT}",
            ("file",),
        ),
    ),
    ConsistencyRule(
        "dependent_var_name",
        lambda c: not c.predict_file and not c.dependent_var_name,
        lambda: MissingRequiredFieldError(
            f"Please specify a dependent variable name with '--depvarname'. {HELP_HINT}",
            ("depvarname", "predict"),
        ),
    ),
    ConsistencyRule(
        "instrument_var_name",
        lambda c: _instrumental(c) and not c.instrument_var_name,
        lambda: MissingRequiredFieldError(
            "When using instrumental trees, the instrument variable must be specified "
            f"through '--instrumentvarname'. {HELP_HINT}",
            ("instrumentvarname",),
        ),
    ),
    ConsistencyRule(
        "status_var_name",
        lambda c: _instrumental(c) and not c.status_var_name,
        lambda: MissingRequiredFieldError(
            "When using instrumental trees, the treatment variable must be specified "
            f"through '--statusvarname'. {HELP_HINT}",
            ("statusvarname",),
        ),
    ),
    ConsistencyRule(
        "split_weights_xor_always_split_vars",
        lambda c: bool(c.split_weights_file) and bool(c.always_split_vars),
        lambda: MutualExclusionError(
            "Please use only one option of '--splitweights' and '--alwayssplitvars'.",
            ("splitweights", "alwayssplitvars"),
        ),
    ),
)


class ConsistencyValidator:
    """
    ConsistencyValidator

    Contract:
    - pure inspection of a fully scanned RunConfiguration, no mutation
    - rules run in fixed order, first violation is returned
    - None means the configuration describes an executable run
    """

    def __init__(self, rules: Sequence[ConsistencyRule] = RULES):
        self.rules = tuple(rules)

    def validate(self, config: RunConfiguration) -> Optional[ConfigValidationError]:
        for rule in self.rules:
            if rule.violated(config):
                logs.debug(f"[ConsistencyValidator] rule '{rule.name}' violated")
                return rule.error()
        return None
