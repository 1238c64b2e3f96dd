"""
lazyrepr: printing values of a lazy functional configuration language.

This module provides:
- Printer / print_value / show_value: render a value as text
- ValuePrinter: lazily rendered value for log and error messages
- PrintOptions: limits, forcing, cycle tracking and colors
- EvalState and the runtime value model (lazyrepr.runtime)

Usage:
    from lazyrepr import EvalState, PrintOptions, show_value

    state = EvalState()
    v = state.from_python({"b": 1, "a": [1, 2.5, None]})
    print(show_value(state, v))
    # { a = [ 1 2.5 null ]; b = 1; }

    opts = PrintOptions(max_attrs=1)
    print(show_value(state, state.from_python({"type": "x", "z": 1}), opts))
    # { type = "x"; «1 attribute elided»}
"""

from .errors import (
    BaseError,
    EvalError,
    InfiniteRecursionError,
    TypeMismatchError,
    AttributeMissingError,
    ThrownError,
    AbortError,
    Interrupted,
    InvariantViolation,
    ConfigError,
)

from .options import (
    UNLIMITED,
    PrintOptions,
    ERROR_PRINT_OPTIONS,
    load_print_options,
)

from .lexical import (
    RESERVED_KEYWORDS,
    is_reserved_keyword,
    is_var_name,
    print_identifier,
    print_attribute_name,
    print_literal_string,
    print_literal_bool,
    print_elided,
)

from .context import PrintContext

from .printer import (
    Printer,
    ValuePrinter,
    print_value,
    show_value,
)

from .interrupt import CancellationToken
from .positions import Pos, PosTable, NO_POS
from .store import Store, StorePath
from .symbols import Symbol, SymbolTable

from .runtime import (
    Value,
    ValueType,
    EvalState,
    ExternalValue,
)

__all__ = [
    # Errors
    'BaseError',
    'EvalError',
    'InfiniteRecursionError',
    'TypeMismatchError',
    'AttributeMissingError',
    'ThrownError',
    'AbortError',
    'Interrupted',
    'InvariantViolation',
    'ConfigError',

    # Options
    'UNLIMITED',
    'PrintOptions',
    'ERROR_PRINT_OPTIONS',
    'load_print_options',

    # Quoting
    'RESERVED_KEYWORDS',
    'is_reserved_keyword',
    'is_var_name',
    'print_identifier',
    'print_attribute_name',
    'print_literal_string',
    'print_literal_bool',
    'print_elided',

    # Printer
    'PrintContext',
    'Printer',
    'ValuePrinter',
    'print_value',
    'show_value',

    # Collaborators
    'CancellationToken',
    'Pos',
    'PosTable',
    'NO_POS',
    'Store',
    'StorePath',
    'Symbol',
    'SymbolTable',

    # Runtime
    'Value',
    'ValueType',
    'EvalState',
    'ExternalValue',
]
