"""
Runtime value model and reference evaluator.

This module provides:
- Value: mutable value cells with an internal representation tag
- Bindings/Attr: attribute set payloads
- Lambda/PrimOp/PrimOpApp: callables
- Thunk/App: deferred computations
- ExternalValue: base class for plugin-provided values
- EvalState: forcing, function application and Python conversion
"""

from .values import (
    Value,
    ValueType,
    InternalType,
    Attr,
    Bindings,
    Lambda,
    PrimOp,
    PrimOpApp,
    Thunk,
    App,
    ExternalValue,
    int_val,
    float_val,
    bool_val,
    string_val,
    path_val,
    null_val,
    attrs_val,
    list_val,
    lambda_val,
    primop_val,
    primop_app_val,
    thunk_val,
    app_val,
    external_val,
)

from .evaluator import (
    EvalState,
)

__all__ = [
    # Values
    'Value',
    'ValueType',
    'InternalType',
    'Attr',
    'Bindings',
    'Lambda',
    'PrimOp',
    'PrimOpApp',
    'Thunk',
    'App',
    'ExternalValue',
    'int_val',
    'float_val',
    'bool_val',
    'string_val',
    'path_val',
    'null_val',
    'attrs_val',
    'list_val',
    'lambda_val',
    'primop_val',
    'primop_app_val',
    'thunk_val',
    'app_val',
    'external_val',

    # Evaluator
    'EvalState',
]
