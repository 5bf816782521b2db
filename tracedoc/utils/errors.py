# tracedoc/utils/errors.py
from __future__ import annotations


class TracedocError(RuntimeError):
    """
    Base error for the rendering core.
    """


class UserInputError(TracedocError):
    """
    Raised for invalid user-provided input (trace files, config paths).
    Should NOT print traceback.
    """


class TermConversionError(TracedocError, TypeError):
    """Raised when a Python value has no Term representation."""


class TraceLoadError(UserInputError):
    """Raised when a trace file record cannot be turned into a Fact."""


# ------------------------------------------------------------------
# Directive errors
#
# Renderers raise these; DocumentAssembler turns every one of them
# into an inline diagnostic instead of aborting the document.
# ------------------------------------------------------------------
class DirectiveError(TracedocError):
    def __init__(self, directive: str, message: str):
        super().__init__(f"{directive}: {message}")
        self.directive = directive
        self.message = message

    def diagnostic(self) -> str:
        return f"<!-- {self.directive}: {self.message} -->"


class UnknownDirectiveError(DirectiveError):
    def __init__(self, directive: str):
        super().__init__(directive, "unknown directive")

    def diagnostic(self) -> str:
        return f"<!-- Unknown directive: {self.directive} -->"


class MissingArgumentError(DirectiveError):
    def __init__(self, directive: str, argument: str):
        super().__init__(directive, f"missing {argument} arg")
        self.argument = argument


class InvalidArgumentError(DirectiveError):
    def __init__(self, directive: str, argument: str, value: str, reason: str = ""):
        detail = f"invalid {argument} arg '{value}'"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(directive, detail)
        self.argument = argument
        self.value = value


class MalformedDirectiveError(DirectiveError):
    def __init__(self, reason: str):
        super().__init__("malformed directive", reason)
        self.reason = reason
