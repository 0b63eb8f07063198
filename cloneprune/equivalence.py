"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Callable

from .ir_model import BasicBlock, Function, Statement, statement_eq

StatementEq = Callable[[Statement, Statement], bool]


def blocks_equivalent(
    a: BasicBlock, b: BasicBlock, stmt_eq: StatementEq = statement_eq
) -> bool:
    if len(a.statements) != len(b.statements):
        return False
    for stmt_a, stmt_b in zip(a.statements, b.statements, strict=True):
        if not stmt_eq(stmt_a, stmt_b):
            return False
    return True


def functions_equivalent(
    a: Function, b: Function, stmt_eq: StatementEq = statement_eq
) -> bool:
    """
    Positional structural comparison of two function bodies.

    Block ``i`` of ``a`` is compared with block ``i`` of ``b`` only; the
    first mismatch in block count, statement count or statement content
    ends the comparison.
    """
    if len(a.blocks) != len(b.blocks):
        return False
    for block_a, block_b in zip(a.blocks, b.blocks, strict=True):
        if not blocks_equivalent(block_a, block_b, stmt_eq):
            return False
    return True
