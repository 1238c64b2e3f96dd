"""
Runtime values.

A Value is a mutable cell: forcing a thunk overwrites the cell with its
result, so every reference to the cell sees the memoised value. Composite
payloads (Bindings for attribute sets, Python lists for lists) are shared by
reference when a cell is copied into another, which is what lets the printer
detect cycles by payload identity.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, TextIO

from ..positions import NO_POS, PosIdx
from ..symbols import NO_SYMBOL, Symbol

if TYPE_CHECKING:
    from .evaluator import EvalState


class ValueType(Enum):
    """Kinds visible to users of the language."""
    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    STRING = auto()
    PATH = auto()
    NULL = auto()
    ATTRS = auto()
    LIST = auto()
    FUNCTION = auto()
    THUNK = auto()
    EXTERNAL = auto()


class InternalType(Enum):
    """Representation tags. Several map onto one ValueType."""
    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    STRING = auto()
    PATH = auto()
    NULL = auto()
    ATTRS = auto()
    LIST = auto()
    LAMBDA = auto()
    PRIMOP = auto()
    PRIMOP_APP = auto()
    THUNK = auto()
    APP = auto()
    BLACKHOLE = auto()
    EXTERNAL = auto()


_PUBLIC_TYPES: Dict[InternalType, ValueType] = {
    InternalType.INT: ValueType.INT,
    InternalType.FLOAT: ValueType.FLOAT,
    InternalType.BOOL: ValueType.BOOL,
    InternalType.STRING: ValueType.STRING,
    InternalType.PATH: ValueType.PATH,
    InternalType.NULL: ValueType.NULL,
    InternalType.ATTRS: ValueType.ATTRS,
    InternalType.LIST: ValueType.LIST,
    InternalType.LAMBDA: ValueType.FUNCTION,
    InternalType.PRIMOP: ValueType.FUNCTION,
    InternalType.PRIMOP_APP: ValueType.FUNCTION,
    InternalType.THUNK: ValueType.THUNK,
    InternalType.APP: ValueType.THUNK,
    InternalType.BLACKHOLE: ValueType.THUNK,
    InternalType.EXTERNAL: ValueType.EXTERNAL,
}

_TYPE_DESCRIPTIONS: Dict[ValueType, str] = {
    ValueType.INT: "an integer",
    ValueType.FLOAT: "a float",
    ValueType.BOOL: "a Boolean",
    ValueType.STRING: "a string",
    ValueType.PATH: "a path",
    ValueType.NULL: "null",
    ValueType.ATTRS: "a set",
    ValueType.LIST: "a list",
    ValueType.FUNCTION: "a function",
    ValueType.THUNK: "a thunk",
}


# --- Payloads ---

@dataclass
class Attr:
    """One binding in an attribute set."""
    name: Symbol
    value: "Value"
    pos: PosIdx = NO_POS


class Bindings:
    """The attributes of a set, keyed by symbol, in insertion order."""

    def __init__(self, attrs: Optional[List[Attr]] = None):
        self._attrs: Dict[Symbol, Attr] = {}
        for attr in attrs or []:
            self.push(attr)

    def push(self, attr: Attr) -> None:
        """Add an attribute, replacing any existing one with the same name."""
        self._attrs[attr.name] = attr

    def get(self, name: Symbol) -> Optional[Attr]:
        return self._attrs.get(name)

    def __iter__(self) -> Iterator[Attr]:
        return iter(self._attrs.values())

    def __len__(self) -> int:
        return len(self._attrs)


@dataclass
class Lambda:
    """A user-defined function. `name` is NO_SYMBOL for anonymous lambdas."""
    body: Callable[["EvalState", "Value"], "Value"]
    name: Symbol = NO_SYMBOL
    pos: PosIdx = NO_POS


@dataclass
class PrimOp:
    """A built-in function taking exactly `arity` arguments."""
    name: str
    arity: int
    fun: Callable[["EvalState", List["Value"]], "Value"]
    doc: Optional[str] = None

    def __str__(self) -> str:
        return f"primop {self.name}"


@dataclass
class PrimOpApp:
    """A primop applied to fewer arguments than its arity."""
    left: "Value"
    arg: "Value"


@dataclass
class Thunk:
    """A suspended computation."""
    compute: Callable[["EvalState"], "Value"]


@dataclass
class App:
    """A suspended function application."""
    fn: "Value"
    arg: "Value"


class ExternalValue(ABC):
    """
    A value owned by a plugin. The printer knows nothing about its
    contents and asks it to print itself.
    """

    @abstractmethod
    def print(self, output: TextIO) -> None:
        """Write a textual representation to `output`."""

    @abstractmethod
    def show_type(self) -> str:
        """Type description for error messages, e.g. 'a regex'."""

    @abstractmethod
    def type_of(self) -> str:
        """Name returned by `builtins.typeOf`."""


# --- The value cell ---

class Value:
    """
    A runtime value.

    `internal_type` is None for a cell that was never initialised.
    """

    __slots__ = ("internal_type", "payload")

    def __init__(self, internal_type: Optional[InternalType] = None, payload: Any = None):
        self.internal_type = internal_type
        self.payload = payload

    def type(self) -> Optional[ValueType]:
        """The public kind, or None if the cell is uninitialised."""
        if self.internal_type is None:
            return None
        return _PUBLIC_TYPES.get(self.internal_type)

    def copy_from(self, other: "Value") -> None:
        """Overwrite this cell with another (sharing its payload)."""
        self.internal_type = other.internal_type
        self.payload = other.payload

    def show_type(self) -> str:
        """Human-readable type with article, for error messages."""
        if self.internal_type is InternalType.EXTERNAL:
            return self.payload.show_type()
        vtype = self.type()
        if vtype is None:
            return "an uninitialised value"
        return _TYPE_DESCRIPTIONS[vtype]

    # Representation checks

    def is_thunk(self) -> bool:
        return self.internal_type is InternalType.THUNK

    def is_app(self) -> bool:
        return self.internal_type is InternalType.APP

    def is_blackhole(self) -> bool:
        return self.internal_type is InternalType.BLACKHOLE

    def is_lambda(self) -> bool:
        return self.internal_type is InternalType.LAMBDA

    def is_primop(self) -> bool:
        return self.internal_type is InternalType.PRIMOP

    def is_primop_app(self) -> bool:
        return self.internal_type is InternalType.PRIMOP_APP

    # Typed accessors

    @property
    def attrs(self) -> Bindings:
        return self.payload

    @property
    def list_items(self) -> List[Optional["Value"]]:
        return self.payload

    @property
    def external(self) -> ExternalValue:
        return self.payload

    def primop_app_primop(self) -> Optional[PrimOp]:
        """The primop at the root of a partial application chain."""
        left = self
        while left is not None and left.is_primop_app():
            left = left.payload.left
        if left is not None and left.is_primop():
            return left.payload
        return None

    def __repr__(self) -> str:
        if self.internal_type is None:
            return "Value(<uninitialised>)"
        return f"Value({self.internal_type.name}, {self.payload!r})"


# Convenience constructors

def int_val(n: int) -> Value:
    """Create an integer value."""
    return Value(InternalType.INT, int(n))


def float_val(x: float) -> Value:
    """Create a float value."""
    return Value(InternalType.FLOAT, float(x))


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(InternalType.BOOL, bool(b))


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(InternalType.STRING, str(s))


def path_val(p: str) -> Value:
    """Create a path value from an absolute path string."""
    return Value(InternalType.PATH, str(p))


def null_val() -> Value:
    return Value(InternalType.NULL, None)


def attrs_val(bindings: Bindings) -> Value:
    """Create an attribute set value around existing bindings."""
    return Value(InternalType.ATTRS, bindings)


def list_val(items: List[Optional[Value]]) -> Value:
    """Create a list value. The list object itself is shared, not copied."""
    return Value(InternalType.LIST, items)


def lambda_val(fun: Optional[Lambda]) -> Value:
    return Value(InternalType.LAMBDA, fun)


def primop_val(primop: Optional[PrimOp]) -> Value:
    return Value(InternalType.PRIMOP, primop)


def primop_app_val(left: Value, arg: Value) -> Value:
    return Value(InternalType.PRIMOP_APP, PrimOpApp(left, arg))


def thunk_val(compute: Callable[["EvalState"], Value]) -> Value:
    """Create an unevaluated value."""
    return Value(InternalType.THUNK, Thunk(compute))


def app_val(fn: Value, arg: Value) -> Value:
    """Create an unevaluated function application."""
    return Value(InternalType.APP, App(fn, arg))


def external_val(external: ExternalValue) -> Value:
    return Value(InternalType.EXTERNAL, external)
