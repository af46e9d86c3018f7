# qforest/utils/errors.py
from __future__ import annotations

from typing import Sequence

HELP_HINT = "See '--help' for details."


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided arguments (options, values, combinations).
    Should NOT print traceback.
    """


class OptionError(UserInputError):
    """
    Scanner-level failure tied to one option spelling.

    `option` is the external name without leading dashes for known options,
    or the spelling as typed for unknown ones.
    """

    def __init__(self, option: str, message: str):
        self.option = option
        super().__init__(message)


class MalformedOptionError(OptionError):
    """Value failed coercion or its range check."""

    def __init__(self, option: str, constraint: str, value: str | None = None):
        self.constraint = constraint
        self.value = value
        got = f" Got '{value}'." if value is not None else ""
        super().__init__(
            option,
            f"Illegal argument for option '{option}'. {constraint}{got} {HELP_HINT}",
        )


class MissingOptionArgumentError(MalformedOptionError):
    def __init__(self, option: str):
        super().__init__(option, "This option requires an argument.")


class UnknownOptionError(OptionError):
    def __init__(self, spelling: str, candidates: Sequence[str] = ()):
        self.candidates = tuple(candidates)
        if self.candidates:
            listed = " ".join(f"'--{c}'" for c in self.candidates)
            message = f"Option '{spelling}' is ambiguous; possibilities: {listed}. {HELP_HINT}"
        else:
            message = f"Unrecognized option '{spelling}'. {HELP_HINT}"
        super().__init__(spelling, message)


class ConfigValidationError(UserInputError):
    """
    Raised by the consistency validator.

    `options` names the long options involved, in the order they are mentioned.
    """

    def __init__(self, message: str, options: Sequence[str]):
        self.options = tuple(options)
        super().__init__(message)


class MissingRequiredFieldError(ConfigValidationError):
    pass


class MutualExclusionError(ConfigValidationError):
    pass


class InformationalExit(Exception):
    """
    help / version was requested. Not an error: the caller prints static text
    and stops without running validation or the engine.
    """

    def __init__(self, request):
        self.request = request
        super().__init__(f"{request.value} requested")
