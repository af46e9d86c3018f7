# qforest/args/scanner.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from qforest import logs
from qforest.args.options import (
    Arity,
    InfoRequest,
    OptionSpec,
    lookup_short,
    resolve_long,
)
from qforest.config.defaults_config import RunDefaults
from qforest.config.run_config import RunConfiguration
from qforest.utils.errors import (
    MalformedOptionError,
    MissingOptionArgumentError,
    OptionError,
    UnknownOptionError,
)


@dataclass(frozen=True)
class Lexeme:
    """
    One lexical unit of argv.

    kind:
      - "option":     spec + raw value (None for flags / info)
      - "positional": token not consumed by any option
      - "error":      unknown spelling, missing value, value on a flag
    """

    kind: str
    spec: Optional[OptionSpec] = None
    value: Optional[str] = None
    token: Optional[str] = None
    error: Optional[OptionError] = None


def lex(argv: Sequence[str]) -> Iterator[Lexeme]:
    """
    getopt_long-style tokenizer.

    Supports --name, --name=value, unambiguous long prefixes, -x VALUE,
    -xVALUE, clustered short flags (-uvw) and `--` as end of options.
    Non-option tokens are yielded as positionals and scanning continues.
    Errors are yielded, not raised; the consumer decides whether to stop.
    """
    i = 0
    n = len(argv)
    while i < n:
        arg = argv[i]
        i += 1

        if arg == "--":
            for rest in argv[i:]:
                yield Lexeme("positional", token=rest)
            return

        if arg.startswith("--"):
            name, eq, attached = arg[2:].partition("=")
            spec, candidates = resolve_long(name)
            if spec is None:
                yield Lexeme("error", error=UnknownOptionError(f"--{name}", candidates))
                continue

            if spec.arity is Arity.REQUIRED:
                if eq:
                    value = attached
                elif i < n:
                    value = argv[i]
                    i += 1
                else:
                    yield Lexeme("error", error=MissingOptionArgumentError(spec.long))
                    continue
                yield Lexeme("option", spec=spec, value=value, token=arg)
            elif eq:
                yield Lexeme(
                    "error",
                    error=MalformedOptionError(
                        spec.long, "This option does not take an argument.", attached
                    ),
                )
            else:
                yield Lexeme("option", spec=spec, token=arg)
            continue

        if arg.startswith("-") and arg != "-":
            j = 1
            while j < len(arg):
                char = arg[j]
                j += 1
                spec = lookup_short(char)
                if spec is None:
                    yield Lexeme("error", error=UnknownOptionError(f"-{char}"))
                    continue

                if spec.arity is Arity.REQUIRED:
                    # rest of the cluster is the value, else the next token
                    if j < len(arg):
                        value = arg[j:]
                    elif i < n:
                        value = argv[i]
                        i += 1
                    else:
                        yield Lexeme("error", error=MissingOptionArgumentError(spec.long))
                        break
                    yield Lexeme("option", spec=spec, value=value, token=arg)
                    break

                yield Lexeme("option", spec=spec, token=f"-{char}")
            continue

        yield Lexeme("positional", token=arg)


@dataclass
class ScanResult:
    """
    Exactly one of config / info / error is set.
    """

    config: Optional[RunConfiguration] = None
    leftovers: List[str] = field(default_factory=list)
    info: Optional[InfoRequest] = None
    error: Optional[OptionError] = None


class OptionScanner:
    """
    OptionScanner

    Contract:
    - one left-to-right pass over argv, driven by the OPTIONS table
    - every value is coerced + range-checked before it is stored
    - first failure aborts the scan (no partial recovery, no default substitution)
    - help / version anywhere in argv short-circuits before any value is checked
    - leftover positionals are logged and returned, never an error
    """

    def __init__(self, defaults: RunDefaults | None = None):
        self.defaults = defaults or RunDefaults()

    def scan(self, argv: Sequence[str]) -> ScanResult:
        info = self.find_info_request(argv)
        if info is not None:
            logs.debug(f"[OptionScanner] {info.value} requested -> stop")
            return ScanResult(info=info)

        config = RunConfiguration.with_defaults(self.defaults)
        leftovers: List[str] = []

        for lexeme in lex(argv):
            if lexeme.kind == "positional":
                leftovers.append(lexeme.token)
                continue

            if lexeme.kind == "error":
                logs.debug(f"[OptionScanner] abort: {lexeme.error}")
                return ScanResult(error=lexeme.error)

            error = self._store(config, lexeme.spec, lexeme.value)
            if error is not None:
                logs.debug(f"[OptionScanner] abort: {error}")
                return ScanResult(error=error)

        for token in leftovers:
            logs.warning(f"Other parameter, not processed: {token}")

        return ScanResult(config=config, leftovers=leftovers)

    @staticmethod
    def find_info_request(argv: Sequence[str]) -> Optional[InfoRequest]:
        """
        Lenient pass: skip errors, return the first help/version request.
        """
        for lexeme in lex(argv):
            if lexeme.kind == "option" and lexeme.spec.arity is Arity.INFO:
                return lexeme.spec.info
        return None

    @staticmethod
    def requests_verbose(argv: Sequence[str]) -> bool:
        """
        Lenient pass for --verbose, so logging can be set up before the scan.
        """
        return any(
            lexeme.kind == "option" and lexeme.spec.field == "verbose"
            for lexeme in lex(argv)
        )

    @staticmethod
    def _store(
        config: RunConfiguration,
        spec: OptionSpec,
        value: Optional[str],
    ) -> Optional[MalformedOptionError]:
        if spec.arity is Arity.NONE:
            setattr(config, spec.field, True)
            logs.debug(f"[OptionScanner] --{spec.long} -> {spec.field}=True")
            return None

        result = spec.coerce(value)
        if not result.ok:
            return MalformedOptionError(spec.long, spec.constraint, result.rejected)

        # later repeats overwrite earlier ones
        setattr(config, spec.field, result.value)
        logs.debug(f"[OptionScanner] --{spec.long} -> {spec.field}={result.value!r}")
        return None
