"""
Exceptions raised by the evaluator and the value printer.

Error tiers:
- EvalError: a value failed to evaluate. The printer renders these inline
  and keeps going.
- Interrupted: the user cancelled. Always propagates.
- InvariantViolation: the value model is corrupt. Always propagates.
- ConfigError: invalid print configuration.
"""

from dataclasses import dataclass
from typing import List, Optional

from .positions import Pos


@dataclass
class Trace:
    """One frame of context attached to an error ("while evaluating ...")."""
    hint: str
    pos: Optional[Pos] = None

    def format(self) -> str:
        if self.pos is not None:
            return f"… {self.hint}\n  at {self.pos}"
        return f"… {self.hint}"


class BaseError(Exception):
    """Base exception for evaluation-time errors."""

    def __init__(self, message: str, pos: Optional[Pos] = None):
        self.message = message
        self.pos = pos
        self.traces: List[Trace] = []
        super().__init__(message)

    def msg(self) -> str:
        """The primary message, without traces."""
        return self.message

    def add_trace(self, pos: Optional[Pos], hint: str) -> "BaseError":
        """Attach a context frame. Returns self so callers can re-raise."""
        self.traces.append(Trace(hint, pos))
        return self

    def __str__(self) -> str:
        parts = [f"error: {self.message}"]
        if self.pos is not None:
            parts.append(f"  at {self.pos}")
        for trace in reversed(self.traces):
            parts.append(trace.format())
        return "\n".join(parts)


class EvalError(BaseError):
    """A value could not be evaluated."""
    pass


class InfiniteRecursionError(EvalError):
    """A thunk was forced while it was already being forced."""

    def __init__(self, pos: Optional[Pos] = None):
        super().__init__("infinite recursion encountered", pos)


class TypeMismatchError(EvalError):
    """A value of the wrong type was used."""
    pass


class AttributeMissingError(EvalError):
    """A required attribute was not found in an attribute set."""
    pass


class ThrownError(EvalError):
    """Raised by user code via `throw`."""
    pass


class AbortError(EvalError):
    """Raised by user code via `abort`."""

    def __init__(self, message: str, pos: Optional[Pos] = None):
        super().__init__(f"evaluation aborted with the following error message: '{message}'", pos)


class Interrupted(BaseError):
    """The cancellation token was triggered."""

    def __init__(self):
        super().__init__("interrupted by the user")


class InvariantViolation(Exception):
    """
    The value model reached a state that cannot happen.

    This indicates a bug in the evaluator, not a user error, so it is
    never rendered inline.
    """
    pass


class ConfigError(ValueError):
    """Invalid print options or configuration file."""
    pass


# --- Common evaluation errors ---

def error_type_mismatch(expected: str, found: str, pos: Optional[Pos] = None) -> TypeMismatchError:
    """Value has the wrong type."""
    return TypeMismatchError(f"expected {expected} but found {found}", pos)


def error_not_callable(found: str, pos: Optional[Pos] = None) -> TypeMismatchError:
    """Attempt to call a non-function."""
    return TypeMismatchError(
        f"attempt to call something which is not a function but {found}", pos
    )


def error_attribute_missing(name: str, pos: Optional[Pos] = None) -> AttributeMissingError:
    """Attribute lookup failed."""
    return AttributeMissingError(f"attribute '{name}' missing", pos)


def error_not_in_store(path: str, pos: Optional[Pos] = None) -> EvalError:
    """Path is outside the store directory."""
    return EvalError(f"path '{path}' is not in the store", pos)
