"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from .errors import UnitContractError
from .ir_model import (
    Assign,
    Call,
    Cond,
    Eval,
    Goto,
    Nop,
    Raise,
    Return,
    Statement,
)


def render_statement(stmt: Statement) -> str:
    match stmt:
        case Assign():
            return f"{stmt.target} = {stmt.value};"
        case Call():
            call = f"{stmt.callee} ({', '.join(stmt.args)});"
            return call if stmt.target is None else f"{stmt.target} = {call}"
        case Cond():
            return f"if ({stmt.test})"
        case Goto():
            return f"goto <{stmt.label}>;"
        case Return():
            return "return;" if stmt.value is None else f"return {stmt.value};"
        case Raise():
            return "raise;" if stmt.exc is None else f"raise {stmt.exc};"
        case Eval():
            return f"{stmt.expr};"
        case Nop():
            return "nop;"
        case _:
            raise UnitContractError(f"Unknown statement kind: {type(stmt).__name__}")
