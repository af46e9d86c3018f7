# qforest/args/pipeline.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from qforest import logs
from qforest.args.options import InfoRequest
from qforest.args.outcome import OutcomeKind, ParseOutcome
from qforest.args.scanner import OptionScanner
from qforest.args.validator import ConsistencyValidator
from qforest.config.defaults_config import RunDefaults
from qforest.config.run_config import RunConfiguration
from qforest.utils.errors import UserInputError


@dataclass
class ArgsContext:
    """
    ArgsContext

    Semantics:
    - One context == one process invocation
    - config has exactly one writer (ScanStep), then readers only
    """

    argv: List[str]

    config: Optional[RunConfiguration] = None
    leftovers: List[str] = field(default_factory=list)
    info: Optional[InfoRequest] = None
    error: Optional[UserInputError] = None

    @property
    def halted(self) -> bool:
        return self.info is not None or self.error is not None

    def to_outcome(self) -> ParseOutcome:
        if self.error is not None:
            return ParseOutcome(kind=OutcomeKind.ERROR, error=self.error)
        if self.info is not None:
            return ParseOutcome(kind=OutcomeKind.STOP, info=self.info)
        return ParseOutcome(
            kind=OutcomeKind.PROCEED,
            config=self.config,
            leftovers=tuple(self.leftovers),
        )


class ArgsStep:
    """
    Step 基类：消费 ctx，返回 ctx。
    """

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def run(self, ctx: ArgsContext) -> ArgsContext:
        raise NotImplementedError


class ScanStep(ArgsStep):
    """
    Contract:
    - consumes ctx.argv
    - produces ctx.config + ctx.leftovers, or ctx.info, or ctx.error
    """

    def __init__(self, scanner: OptionScanner):
        self.scanner = scanner

    def run(self, ctx: ArgsContext) -> ArgsContext:
        result = self.scanner.scan(ctx.argv)
        ctx.config = result.config
        ctx.leftovers = list(result.leftovers)
        ctx.info = result.info
        ctx.error = result.error
        return ctx


class ValidateStep(ArgsStep):
    """
    Contract:
    - consumes ctx.config (read-only)
    - produces ctx.error on the first violated rule
    """

    def __init__(self, validator: ConsistencyValidator):
        self.validator = validator

    def run(self, ctx: ArgsContext) -> ArgsContext:
        ctx.error = self.validator.validate(ctx.config)
        return ctx


class ArgsPipeline:
    """
    Scan → Validate, strictly in sequence, no re-entry.
    A step that sets info or error halts the pipeline.
    """

    def __init__(self, steps: Sequence[ArgsStep]):
        self.steps = list(steps)

    def run(self, argv: Sequence[str]) -> ParseOutcome:
        ctx = ArgsContext(argv=list(argv))

        for step in self.steps:
            ctx = step.run(ctx)
            if ctx.halted:
                logs.debug(f"[ArgsPipeline] halted after {step.step_name}")
                break

        return ctx.to_outcome()


def build_args_pipeline(defaults: RunDefaults | None = None) -> ArgsPipeline:
    return ArgsPipeline(
        steps=[
            ScanStep(OptionScanner(defaults)),
            ValidateStep(ConsistencyValidator()),
        ]
    )


def parse_arguments(argv: Sequence[str], defaults: RunDefaults | None = None) -> ParseOutcome:
    """
    Turn raw process arguments (without the program name) into a ParseOutcome.
    """
    return build_args_pipeline(defaults).run(argv)
