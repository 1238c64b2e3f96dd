"""
Reference evaluator.

EvalState owns the symbol table, position table, store and cancellation
token, and knows how to force thunks and apply functions. It is deliberately
small: there is no parser here, values are built directly or converted from
Python data with `from_python`.
"""

from pathlib import PurePath
from typing import Any, Dict, List, Optional, Tuple

from .values import (
    Value, Attr, Bindings, InternalType, ValueType,
    int_val, float_val, bool_val, string_val, path_val, null_val,
    attrs_val, list_val, primop_app_val,
)
from ..errors import (
    EvalError, InfiniteRecursionError, InvariantViolation,
    error_attribute_missing, error_not_callable, error_not_in_store,
    error_type_mismatch,
)
from ..interrupt import CancellationToken
from ..positions import NO_POS, PosIdx, PosTable
from ..store import Store, StorePath
from ..symbols import SymbolTable


class EvalState:
    """
    Evaluation state shared by all values of one evaluator instance.

    Forcing is single-threaded: a thunk being forced is marked as a
    blackhole, so forcing it again from the same call stack is reported as
    infinite recursion instead of overflowing the Python stack.
    """

    def __init__(self, store: Optional[Store] = None,
                 interrupt: Optional[CancellationToken] = None):
        self.symbols = SymbolTable()
        self.positions = PosTable()
        self.store = store or Store()
        self.interrupt = interrupt or CancellationToken()

        self.s_type = self.symbols.create("type")
        self.s_drv_path = self.symbols.create("drvPath")

    def check_interrupt(self) -> None:
        """Raise Interrupted if the cancellation token was triggered."""
        self.interrupt.check()

    # --- Forcing ---

    def force_value(self, v: Value, pos: PosIdx = NO_POS) -> None:
        """
        Evaluate `v` in place until it is no longer a thunk or application.

        Raises:
            EvalError: if the computation fails; the cell is restored to its
                unevaluated state so it can be forced again later
        """
        if v.is_thunk():
            thunk = v.payload
            v.internal_type = InternalType.BLACKHOLE
            try:
                self.check_interrupt()
                result = thunk.compute(self)
                self.force_value(result, pos)
            except BaseException:
                v.internal_type = InternalType.THUNK
                v.payload = thunk
                raise
            v.copy_from(result)
        elif v.is_app():
            app = v.payload
            result = self.call_function(app.fn, [app.arg], pos)
            v.copy_from(result)
        elif v.is_blackhole():
            raise InfiniteRecursionError(self.positions[pos])

    def call_function(self, fn: Value, args: List[Value], pos: PosIdx = NO_POS) -> Value:
        """
        Apply `fn` to `args`.

        Applying a primop to fewer arguments than its arity produces a
        partial application.
        """
        self.force_value(fn, pos)
        current = fn
        remaining = list(args)

        while remaining:
            self.check_interrupt()

            if current.is_lambda():
                fun = current.payload
                if fun is None:
                    raise InvariantViolation("lambda value without a definition")
                result = fun.body(self, remaining.pop(0))

            elif current.is_primop() or current.is_primop_app():
                primop = current.primop_app_primop()
                if primop is None:
                    raise InvariantViolation("primop value without a definition")
                applied = self._applied_args(current)
                needed = primop.arity - len(applied)
                if len(remaining) < needed:
                    for arg in remaining:
                        current = primop_app_val(current, arg)
                    return current
                call_args = applied + remaining[:needed]
                remaining = remaining[needed:]
                result = primop.fun(self, call_args)

            else:
                raise error_not_callable(current.show_type(), self.positions[pos])

            self.force_value(result, pos)
            current = result

        return current

    @staticmethod
    def _applied_args(v: Value) -> List[Value]:
        """Arguments already captured by a partial application, in order."""
        args = []
        while v.is_primop_app():
            args.append(v.payload.arg)
            v = v.payload.left
        args.reverse()
        return args

    # --- Attribute helpers ---

    def get_attr(self, v: Value, name: str, pos: PosIdx = NO_POS) -> Value:
        """Force `v` as a set and return the (unforced) attribute `name`."""
        self.force_value(v, pos)
        if v.type() is not ValueType.ATTRS:
            raise error_type_mismatch("a set", v.show_type(), self.positions[pos])
        attr = v.attrs.get(self.symbols.create(name))
        if attr is None:
            raise error_attribute_missing(name, self.positions[pos])
        return attr.value

    def is_derivation(self, v: Value) -> bool:
        """True if `v` is a set whose `type` attribute is "derivation"."""
        if v.type() is not ValueType.ATTRS:
            return False
        attr = v.attrs.get(self.s_type)
        if attr is None:
            return False
        self.force_value(attr.value, attr.pos)
        if attr.value.type() is not ValueType.STRING:
            return False
        return attr.value.payload == "derivation"

    def coerce_to_store_path(self, pos: PosIdx, v: Value, error_ctx: str) -> StorePath:
        """
        Force `v` and interpret it as a store path.

        Raises:
            EvalError: with `error_ctx` attached as a trace
        """
        try:
            self.force_value(v, pos)
            if v.type() not in (ValueType.STRING, ValueType.PATH):
                raise error_type_mismatch("a string or path", v.show_type(), self.positions[pos])
            text = v.payload
            if not self.store.is_in_store(text):
                raise error_not_in_store(text, self.positions[pos])
            try:
                return self.store.parse_store_path(text)
            except ValueError as e:
                raise EvalError(str(e), self.positions[pos]) from e
        except EvalError as e:
            e.add_trace(self.positions[pos], error_ctx)
            raise

    # --- Conversion ---

    def from_python(self, data: Any) -> Value:
        """
        Convert plain Python data into a Value.

        dicts become attribute sets, lists and tuples become lists, None
        becomes null and PurePath instances become paths. Values pass through
        unchanged. Shared and self-referencing dicts/lists keep their sharing,
        so a Python cycle becomes a cycle in the value graph.

        Raises:
            TypeError: for unsupported Python types or non-string keys
        """
        memo: Dict[int, Value] = {}
        # Containers are created empty and filled from this stack, so nesting
        # depth is not limited by the interpreter's recursion limit.
        pending: List[Tuple[Any, Value]] = []

        def convert(item: Any) -> Value:
            if isinstance(item, (dict, list, tuple)):
                existing = memo.get(id(item))
                if existing is not None:
                    return existing
                v = attrs_val(Bindings()) if isinstance(item, dict) else list_val([])
                memo[id(item)] = v
                pending.append((item, v))
                return v
            return self._scalar_from_python(item)

        result = convert(data)
        while pending:
            source, v = pending.pop()
            if isinstance(source, dict):
                for key, item in source.items():
                    if not isinstance(key, str):
                        raise TypeError(f"attribute names must be strings, got {type(key).__name__}")
                    v.attrs.push(Attr(self.symbols.create(key), convert(item)))
            else:
                for item in source:
                    v.list_items.append(convert(item))
        return result

    def _scalar_from_python(self, data: Any) -> Value:
        if isinstance(data, Value):
            return data
        if data is None:
            return null_val()
        if isinstance(data, bool):
            return bool_val(data)
        if isinstance(data, int):
            return int_val(data)
        if isinstance(data, float):
            return float_val(data)
        if isinstance(data, str):
            return string_val(data)
        if isinstance(data, PurePath):
            return path_val(str(data))
        raise TypeError(f"cannot convert {type(data).__name__} to a value")
