"""
Value printer.

Renders runtime values as text such as `{ a = 1; b = [ 2 3 ]; }`. The
printer optionally forces thunks as it goes; a failure while forcing one
value is printed inline as `«message»` and does not stop the rest of the
output. Output is bounded by the limits in PrintOptions and every cut is
marked with an elision marker.
"""

import io
import logging
from typing import List, Optional, TextIO, Tuple

from .ansi import (
    ANSI_BLUE, ANSI_CYAN, ANSI_GREEN, ANSI_MAGENTA, ANSI_NORMAL, ANSI_RED,
    filter_ansi_escapes,
)
from .context import PrintContext
from .errors import EvalError, InvariantViolation
from .lexical import (
    print_attribute_name, print_elided, print_literal_bool, print_literal_string,
)
from .options import UNLIMITED, PrintOptions
from .runtime.evaluator import EvalState
from .runtime.values import Value, ValueType

logger = logging.getLogger(__name__)

# Attribute names shown first when output may be truncated.
IMPORTANT_ATTR_NAMES = ("type", "_type")

AttrPair = Tuple[str, Value]


def is_important_attr_name(name: str) -> bool:
    return name in IMPORTANT_ATTR_NAMES


def _important_first_key(pair: AttrPair) -> Tuple[bool, str]:
    return (not is_important_attr_name(pair[0]), pair[0])


def _name_key(pair: AttrPair) -> str:
    return pair[0]


class Printer:
    """
    Prints one value at a time to `output`.

    Per-call state lives in a PrintContext created by print(), so a Printer
    can be reused for several values but must not be used from two threads
    at once.
    """

    def __init__(self, output: TextIO, state: EvalState, options: Optional[PrintOptions] = None):
        self.output = output
        self.state = state
        self.options = options or PrintOptions()

    def print(self, v: Value) -> None:
        """Print a top-level value."""
        ctx = PrintContext.create(self.options.track_repeated)
        self._print(v, 0, ctx)

    # --- Dispatch ---

    def _print(self, v: Value, depth: int, ctx: PrintContext) -> None:
        try:
            self._print_value(v, depth, ctx)
        except RecursionError:
            # Nesting deeper than the interpreter stack allows is cut off here.
            self._print_stack_overflow()

    def _print_value(self, v: Value, depth: int, ctx: PrintContext) -> None:
        self.state.check_interrupt()

        if self.options.force:
            try:
                self.state.force_value(v)
            except EvalError as e:
                self._print_error(e)
                return

        vtype = v.type()
        if vtype is ValueType.INT:
            self._print_int(v)
        elif vtype is ValueType.FLOAT:
            self._print_float(v)
        elif vtype is ValueType.BOOL:
            self._print_bool(v)
        elif vtype is ValueType.STRING:
            self._print_string(v)
        elif vtype is ValueType.PATH:
            self._print_path(v)
        elif vtype is ValueType.NULL:
            self._print_null()
        elif vtype is ValueType.ATTRS:
            self._print_attrs(v, depth, ctx)
        elif vtype is ValueType.LIST:
            self._print_list(v, depth, ctx)
        elif vtype is ValueType.FUNCTION:
            self._print_function(v)
        elif vtype is ValueType.THUNK:
            self._print_thunk(v)
        elif vtype is ValueType.EXTERNAL:
            self._print_external(v)
        else:
            raise InvariantViolation(f"cannot print {v!r}: no recognised value kind")

    # --- Markers ---

    def _write_colored(self, text: str, color: str) -> None:
        if self.options.ansi_colors:
            self.output.write(color)
        self.output.write(text)
        if self.options.ansi_colors:
            self.output.write(ANSI_NORMAL)

    def _print_repeated(self) -> None:
        self._write_colored("«repeated»", ANSI_MAGENTA)

    def _print_nullptr(self) -> None:
        self._write_colored("«nullptr»", ANSI_MAGENTA)

    def _print_elided(self, count: int, single: str, plural: str) -> None:
        print_elided(self.output, count, single, plural, self.options.ansi_colors)

    def _print_error(self, e: EvalError) -> None:
        logger.debug("printing evaluation error inline: %s", e.msg())
        self._write_colored(f"«{e.msg()}»", ANSI_RED)

    def _print_stack_overflow(self) -> None:
        self._write_colored("«stack overflow»", ANSI_RED)

    # --- Scalars ---

    def _print_int(self, v: Value) -> None:
        self._write_colored(str(v.payload), ANSI_CYAN)

    def _print_float(self, v: Value) -> None:
        # Six significant digits, matching C's %g.
        self._write_colored("%g" % v.payload, ANSI_CYAN)

    def _print_bool(self, v: Value) -> None:
        if self.options.ansi_colors:
            self.output.write(ANSI_CYAN)
        print_literal_bool(self.output, v.payload)
        if self.options.ansi_colors:
            self.output.write(ANSI_NORMAL)

    def _print_string(self, v: Value) -> None:
        print_literal_string(self.output, v.payload, self.options.max_string_length,
                             self.options.ansi_colors)

    def _print_path(self, v: Value) -> None:
        self._write_colored(filter_ansi_escapes(v.payload), ANSI_GREEN)

    def _print_null(self) -> None:
        self._write_colored("null", ANSI_CYAN)

    # --- Composites ---

    def _print_derivation(self, v: Value) -> None:
        try:
            store_path = ""
            attr = v.attrs.get(self.state.s_drv_path)
            if attr is not None:
                store_path = self.state.store.print_store_path(
                    self.state.coerce_to_store_path(
                        attr.pos, attr.value, "while evaluating the drvPath of a derivation"))

            text = "«derivation"
            if store_path:
                text += " " + store_path
            text += "»"
            self._write_colored(text, ANSI_GREEN)
        except EvalError as e:
            self._print_error(e)

    def _is_derivation(self, v: Value) -> bool:
        return self.options.force and self.options.derivation_paths and self.state.is_derivation(v)

    def _print_attrs(self, v: Value, depth: int, ctx: PrintContext) -> None:
        if not ctx.enter(v.attrs):
            self._print_repeated()
            return

        try:
            is_derivation = self._is_derivation(v)
        except EvalError as e:
            self._print_error(e)
            return

        if is_derivation:
            self._print_derivation(v)
        elif depth < self.options.max_depth:
            self.output.write("{ ")

            symbols = self.state.symbols
            pairs: List[AttrPair] = [(symbols[attr.name], attr.value) for attr in v.attrs]
            if self.options.max_attrs == UNLIMITED:
                pairs.sort(key=_name_key)
            else:
                pairs.sort(key=_important_first_key)

            for index, (name, value) in enumerate(pairs):
                if ctx.attrs_printed >= self.options.max_attrs:
                    self._print_elided(len(pairs) - index, "attribute", "attributes")
                    break

                print_attribute_name(self.output, name)
                self.output.write(" = ")
                self._print(value, depth + 1, ctx)
                self.output.write("; ")
                ctx.attrs_printed += 1

            self.output.write("}")
        else:
            self.output.write("{ ... }")

    def _print_list(self, v: Value, depth: int, ctx: PrintContext) -> None:
        items = v.list_items
        # Empty lists are shared freely, so they never count as repeats.
        if items and not ctx.enter(items):
            self._print_repeated()
            return

        self.output.write("[ ")
        if depth < self.options.max_depth:
            for index, item in enumerate(items):
                if ctx.list_items_printed >= self.options.max_list_items:
                    self._print_elided(len(items) - index, "item", "items")
                    break

                if item is not None:
                    self._print(item, depth + 1, ctx)
                else:
                    self._print_nullptr()
                self.output.write(" ")
                ctx.list_items_printed += 1
        else:
            self.output.write("... ")
        self.output.write("]")

    # --- Opaque values ---

    def _print_function(self, v: Value) -> None:
        if v.is_lambda():
            text = "lambda"
            fun = v.payload
            if fun is not None:
                if fun.name:
                    text += " " + self.state.symbols[fun.name]
                text += " @ " + filter_ansi_escapes(str(self.state.positions[fun.pos]))
        elif v.is_primop():
            text = str(v.payload) if v.payload is not None else "primop"
        elif v.is_primop_app():
            primop = v.primop_app_primop()
            text = "partially applied " + (str(primop) if primop is not None else "primop")
        else:
            raise InvariantViolation(f"function value with representation {v.internal_type}")

        self._write_colored(f"«{text}»", ANSI_BLUE)

    def _print_thunk(self, v: Value) -> None:
        if v.is_blackhole():
            # Re-entering a thunk on this path does not mean it diverges
            # everywhere, so the wording stays tentative.
            self._write_colored("«potential infinite recursion»", ANSI_RED)
        elif v.is_thunk() or v.is_app():
            self._write_colored("«thunk»", ANSI_MAGENTA)
        else:
            raise InvariantViolation(f"thunk value with representation {v.internal_type}")

    def _print_external(self, v: Value) -> None:
        v.external.print(self.output)


def print_value(state: EvalState, output: TextIO, v: Value,
                options: Optional[PrintOptions] = None) -> None:
    """Print `v` to `output`."""
    Printer(output, state, options).print(v)


def show_value(state: EvalState, v: Value, options: Optional[PrintOptions] = None) -> str:
    """Print `v` to a string."""
    buf = io.StringIO()
    print_value(state, buf, v, options)
    return buf.getvalue()


class ValuePrinter:
    """
    Defers printing until the object is formatted, so it can be passed to
    logging calls and f-strings without rendering values that are never shown.

    Usage:
        logger.debug("result: %s", ValuePrinter(state, v, ERROR_PRINT_OPTIONS))
    """

    def __init__(self, state: EvalState, value: Value, options: Optional[PrintOptions] = None):
        self.state = state
        self.value = value
        self.options = options or PrintOptions()

    def __str__(self) -> str:
        return show_value(self.state, self.value, self.options)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)
