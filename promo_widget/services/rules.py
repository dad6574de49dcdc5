from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

"""Small boolean expression trees shared by Python and the embedded script.

Visibility rules (flash window, filter kinds) are written once as expression
trees. ``evaluate`` runs them against Python values for the preview and
``to_js`` renders the identical expression as script source for the embed,
so the two code paths cannot drift apart.

Truthiness follows the same convention on both sides: None / null / "" are
falsy; dates and non-empty strings are truthy.
"""

__all__ = [
    "And",
    "Cmp",
    "Const",
    "Expr",
    "Not",
    "Var",
    "evaluate",
    "to_js",
]


@dataclass(frozen=True)
class Var:
    name: str


@dataclass(frozen=True)
class Const:
    value: bool


@dataclass(frozen=True)
class Not:
    operand: Expr


@dataclass(frozen=True)
class And:
    operands: tuple[Expr, ...]

    def __init__(self, *operands: Expr) -> None:
        object.__setattr__(self, "operands", tuple(operands))


@dataclass(frozen=True)
class Cmp:
    left: Expr
    op: str  # one of ">=", "<=", "=="
    right: Expr


Expr = Union[Var, Const, Not, And, Cmp]

_PY_OPS: dict[str, Callable[[Any, Any], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
}
_JS_OPS = {">=": ">=", "<=": "<=", "==": "==="}


def evaluate(expr: Expr, env: Mapping[str, Any]) -> Any:
    if isinstance(expr, Var):
        return env[expr.name]
    if isinstance(expr, Const):
        return expr.value
    if isinstance(expr, Not):
        return not evaluate(expr.operand, env)
    if isinstance(expr, And):
        return all(evaluate(o, env) for o in expr.operands)
    if isinstance(expr, Cmp):
        return bool(_PY_OPS[expr.op](evaluate(expr.left, env), evaluate(expr.right, env)))
    raise TypeError(f"unsupported expression node: {expr!r}")


def to_js(expr: Expr) -> str:
    if isinstance(expr, Var):
        return expr.name
    if isinstance(expr, Const):
        return "true" if expr.value else "false"
    if isinstance(expr, Not):
        return f"!{to_js(expr.operand)}"
    if isinstance(expr, And):
        if not expr.operands:
            return "true"
        return "(" + " && ".join(to_js(o) for o in expr.operands) + ")"
    if isinstance(expr, Cmp):
        return f"({to_js(expr.left)} {_JS_OPS[expr.op]} {to_js(expr.right)})"
    raise TypeError(f"unsupported expression node: {expr!r}")
