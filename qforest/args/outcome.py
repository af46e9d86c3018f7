# qforest/args/outcome.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from qforest.args.options import InfoRequest
from qforest.config.run_config import RunConfiguration
from qforest.utils.errors import InformationalExit, UserInputError


class OutcomeKind(str, Enum):
    PROCEED = "proceed"  # run the engine with `config`
    STOP = "stop"        # help / version: print static text, do not run
    ERROR = "error"      # parse or validation failure


@dataclass(frozen=True)
class ParseOutcome:
    """
    ParseOutcome（FINAL）

    The single value handed from argument processing to the process boundary.
    """

    kind: OutcomeKind
    config: Optional[RunConfiguration] = None
    leftovers: Tuple[str, ...] = ()
    info: Optional[InfoRequest] = None
    error: Optional[UserInputError] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.PROCEED

    def unwrap(self) -> RunConfiguration:
        """
        Return the configuration, or raise the carried error /
        InformationalExit for help and version requests.
        """
        if self.kind is OutcomeKind.ERROR:
            raise self.error
        if self.kind is OutcomeKind.STOP:
            raise InformationalExit(self.info)
        return self.config
