# qforest/args/options.py
"""
Declarative option table.

Every command-line option is one `OptionSpec` row: its long and short
spelling, arity, the RunConfiguration field it writes and the coercer that
turns the raw token into a validated value. Adding or removing an option is
a change to `OPTIONS`, nothing else.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from qforest.config.tree_type import TreeType


class Arity(str, Enum):
    NONE = "none"          # boolean flag
    REQUIRED = "required"  # value must follow
    INFO = "info"          # help / version, short-circuits everything


class InfoRequest(str, Enum):
    HELP = "help"
    VERSION = "version"


@dataclass(frozen=True)
class Coerced:
    """
    Result of coercing one raw token.

    `rejected` holds the offending text (the whole token, or the single bad
    element of a list) when coercion or the range check failed.
    """

    value: Any = None
    rejected: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.rejected is None

    @classmethod
    def accept(cls, value: Any) -> "Coerced":
        return cls(value=value)

    @classmethod
    def reject(cls, text: str) -> "Coerced":
        return cls(rejected=text)


Coercer = Callable[[str], Coerced]

_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)

# values are handed to an engine that stores C ints
INT_MIN, INT_MAX = -(2**31), 2**31 - 1


def _parse_int(token: str) -> Optional[int]:
    token = token.strip()
    if not _INT_RE.fullmatch(token):
        return None
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def _parse_float(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        return None


# ------------------------------------------------------------
# Coercers
# ------------------------------------------------------------
def text(token: str) -> Coerced:
    return Coerced.accept(token)


def int_at_least(minimum: int) -> Coercer:
    def coerce(token: str) -> Coerced:
        value = _parse_int(token)
        if value is None or value < minimum:
            return Coerced.reject(token)
        return Coerced.accept(value)

    return coerce


positive_int = int_at_least(1)
non_negative_int = int_at_least(0)


def unit_interval_fraction(token: str) -> Coerced:
    """0 < x <= 1. NaN fails every comparison and is rejected."""
    value = _parse_float(token)
    if value is None or not (0.0 < value <= 1.0):
        return Coerced.reject(token)
    return Coerced.accept(value)


def name_list(token: str) -> Coerced:
    names = token.split(",")
    for name in names:
        if not name:
            return Coerced.reject(token)
    return Coerced.accept(names)


def quantile_list(token: str) -> Coerced:
    # all-or-nothing: one bad element rejects the whole list
    values: List[float] = []
    for element in token.split(","):
        value = _parse_float(element)
        if value is None or not (0.0 < value < 1.0):
            return Coerced.reject(element)
        values.append(value)
    return Coerced.accept(values)


def tree_type_code(token: str) -> Coerced:
    code = _parse_int(token)
    tree_type = TreeType.from_code(code) if code is not None else None
    if tree_type is None:
        return Coerced.reject(token)
    return Coerced.accept(tree_type)


# ------------------------------------------------------------
# Table
# ------------------------------------------------------------
@dataclass(frozen=True)
class OptionSpec:
    long: str
    short: str
    arity: Arity
    field: Optional[str] = None
    coerce: Optional[Coercer] = None
    constraint: str = ""
    metavar: str = ""
    help: str = ""
    info: Optional[InfoRequest] = None

    @property
    def spellings(self) -> str:
        head = f"-{self.short}, --{self.long}"
        return f"{head} {self.metavar}" if self.metavar else head


POSITIVE_INT = "Please give a positive integer."


def _flag(long: str, short: str, field: str, help: str) -> OptionSpec:
    return OptionSpec(long=long, short=short, arity=Arity.NONE, field=field, help=help)


def _value(
    long: str,
    short: str,
    field: str,
    coerce: Coercer,
    metavar: str,
    help: str,
    constraint: str = "",
) -> OptionSpec:
    return OptionSpec(
        long=long,
        short=short,
        arity=Arity.REQUIRED,
        field=field,
        coerce=coerce,
        constraint=constraint,
        metavar=metavar,
        help=help,
    )


OPTIONS: Tuple[OptionSpec, ...] = (
    OptionSpec("help", "h", Arity.INFO, info=InfoRequest.HELP, help="Print this help."),
    OptionSpec(
        "version", "Z", Arity.INFO, info=InfoRequest.VERSION,
        help="Print version information.",
    ),
    _flag("verbose", "v", "verbose", "Turn on verbose mode."),
    _value(
        "file", "f", "input_file", text, "FILE",
        "Filename of input data. Only numerical values are supported.",
    ),
    _value(
        "treetype", "y", "tree_type", tree_type_code, "TYPE",
        f"Set tree type to one of: {TreeType.codes_text()}. (Default: {TreeType.QUANTILE.value})",
        constraint=f"Please give one of: {TreeType.codes_text()}.",
    ),
    _value(
        "quantiles", "q", "quantiles", quantile_list, "Q1,Q2,..",
        "The quantiles to predict when running a quantile forest. "
        "All quantiles must lie in the range (0, 1).",
        constraint="All quantiles must lie in the range (0, 1).",
    ),
    _value("depvarname", "D", "dependent_var_name", text, "NAME", "Name of dependent variable."),
    _value(
        "statusvarname", "s", "status_var_name", text, "NAME",
        "Name of status (treatment) variable, only applicable for instrumental trees.",
    ),
    _value(
        "instrumentvarname", "i", "instrument_var_name", text, "NAME",
        "Name of instrument variable, only applicable for instrumental trees.",
    ),
    _value(
        "ntree", "t", "num_trees", positive_int, "N",
        "Set number of trees to N. (Default: 500)",
        constraint=POSITIVE_INT,
    ),
    _value(
        "mtry", "m", "mtry", positive_int, "N",
        "Number of variables to possibly split at in each node. (Default: automatic)",
        constraint=POSITIVE_INT,
    ),
    _value(
        "targetpartitionsize", "l", "target_partition_size", positive_int, "N",
        "Set minimal node size to N. (Default: automatic)",
        constraint=POSITIVE_INT,
    ),
    _flag("write", "w", "write_forest", "Save forest to file."),
    _value(
        "predict", "P", "predict_file", text, "FILE",
        "Load forest from FILE and predict with new data.",
    ),
    _flag(
        "predall", "X", "predict_all",
        "Return individual predictions for each tree instead of aggregated predictions.",
    ),
    _flag("noreplace", "u", "sample_without_replacement", "Sample without replacement."),
    _value(
        "fraction", "F", "fraction", unit_interval_fraction, "X",
        "Fraction of observations to sample. (Default: 1)",
        constraint="Please give a value in (0,1].",
    ),
    _value("caseweights", "C", "case_weights_file", text, "FILE", "Filename of case weights file."),
    _value(
        "splitweights", "S", "split_weights_file", text, "FILE",
        "Filename of split select weights file.",
    ),
    _value(
        "alwayssplitvars", "A", "always_split_vars", name_list, "V1,V2,..",
        "Comma separated list of variable names to be always considered for splitting.",
        constraint="Please give a comma separated list of variable names.",
    ),
    _value(
        "nthreads", "U", "num_threads", positive_int, "N",
        "Set number of parallel threads to N. (Default: Number of CPUs available)",
        constraint=POSITIVE_INT,
    ),
    _value(
        "seed", "z", "seed", non_negative_int, "SEED",
        "Set random seed to SEED. (Default: No seed)",
        constraint="Please give a non-negative integer.",
    ),
    _flag("savemem", "N", "save_memory_mode", "Use memory saving (but slower) splitting mode."),
)


def _index(options: Sequence[OptionSpec]) -> Tuple[Dict[str, OptionSpec], Dict[str, OptionSpec]]:
    by_long: Dict[str, OptionSpec] = {}
    by_short: Dict[str, OptionSpec] = {}
    for spec in options:
        if spec.long in by_long or spec.short in by_short:
            raise ValueError(f"Duplicate option spelling: --{spec.long} / -{spec.short}")
        by_long[spec.long] = spec
        by_short[spec.short] = spec
    return by_long, by_short


_BY_LONG, _BY_SHORT = _index(OPTIONS)


def lookup_short(char: str) -> Optional[OptionSpec]:
    return _BY_SHORT.get(char)


def resolve_long(name: str) -> Tuple[Optional[OptionSpec], Tuple[str, ...]]:
    """
    Resolve a long spelling (without dashes).

    Exact match first, then unique prefix (`dep` -> `depvarname`).
    Returns (spec, ()) on success, (None, candidates) when the prefix is
    ambiguous and (None, ()) when nothing matches.
    """
    if not name:
        return None, ()
    exact = _BY_LONG.get(name)
    if exact is not None:
        return exact, ()
    candidates = tuple(long for long in _BY_LONG if long.startswith(name))
    if len(candidates) == 1:
        return _BY_LONG[candidates[0]], ()
    return None, candidates
