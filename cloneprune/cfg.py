"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, cast

from .ir_model import (
    EXIT_BLOCK,
    Assign,
    BasicBlock,
    Call,
    Cond,
    Eval,
    Function,
    Goto,
    Nop,
    Raise,
    Return,
    Statement,
)

__all__ = ["CFGBuilder", "lower_statement"]

TryStar = getattr(ast, "TryStar", ast.Try)


class _TryLike(Protocol):
    body: list[ast.stmt]
    handlers: list[ast.ExceptHandler]
    orelse: list[ast.stmt]
    finalbody: list[ast.stmt]


@dataclass(eq=False, slots=True)
class _Block:
    id: int
    statements: list[Statement] = field(default_factory=list)
    successors: list[int] = field(default_factory=list)
    is_terminated: bool = False

    def add_successor(self, block: _Block) -> None:
        if block.id not in self.successors:
            self.successors.append(block.id)


# =========================
# Statement lowering
# =========================


def _text(node: ast.AST) -> str:
    return ast.unparse(node)


def _lower_call(target: str | None, call: ast.Call) -> Call:
    args = [_text(arg) for arg in call.args]
    args.extend(
        f"**{_text(kw.value)}" if kw.arg is None else f"{kw.arg}={_text(kw.value)}"
        for kw in call.keywords
    )
    return Call(target=target, callee=_text(call.func), args=tuple(args))


def _lower_value(target: str, value: ast.expr) -> Statement:
    if isinstance(value, ast.Call):
        return _lower_call(target, value)
    return Assign(target=target, value=_text(value))


def lower_statement(stmt: ast.stmt) -> Statement:
    """Lower a straight-line Python statement into a single IR statement."""
    match stmt:
        case ast.Assign():
            target = " = ".join(_text(t) for t in stmt.targets)
            return _lower_value(target, stmt.value)

        case ast.AnnAssign():
            if stmt.value is None:
                return Nop()
            return _lower_value(_text(stmt.target), stmt.value)

        case ast.AugAssign():
            # x += 1 is lowered as x = x + 1
            binop = ast.BinOp(left=stmt.target, op=stmt.op, right=stmt.value)
            return Assign(target=_text(stmt.target), value=_text(binop))

        case ast.Expr(value=ast.Call() as call):
            return _lower_call(None, call)

        case ast.Expr():
            return Eval(expr=_text(stmt.value))

        case ast.Return():
            return Return(value=None if stmt.value is None else _text(stmt.value))

        case ast.Raise():
            if stmt.exc is None:
                return Raise()
            exc = _text(stmt.exc)
            if stmt.cause is not None:
                exc = f"{exc} from {_text(stmt.cause)}"
            return Raise(exc=exc)

        case ast.Pass():
            return Nop()

        case ast.Break():
            return Goto(label="break")

        case ast.Continue():
            return Goto(label="continue")

        case _:
            return Eval(expr=_text(stmt))


# =========================
# CFG Builder
# =========================


class CFGBuilder:
    __slots__ = ("blocks", "current", "exit")

    def __init__(self) -> None:
        self.blocks: list[_Block]
        self.current: _Block
        self.exit: _Block

    def build(
        self,
        qualname: str,
        node: ast.FunctionDef | ast.AsyncFunctionDef,
    ) -> Function:
        self.blocks = []
        self.exit = _Block(id=EXIT_BLOCK)
        self.current = self.create_block()

        self._visit_statements(node.body)

        if not self.current.is_terminated:
            self.current.add_successor(self.exit)

        return Function(
            name=qualname,
            blocks=tuple(
                BasicBlock(
                    index=block.id,
                    statements=tuple(block.statements),
                    successors=tuple(block.successors),
                )
                for block in self.blocks
            ),
            start_line=node.lineno,
        )

    def create_block(self) -> _Block:
        block = _Block(id=len(self.blocks))
        self.blocks.append(block)
        return block

    # ---------- Internals ----------

    def _visit_statements(self, stmts: Iterable[ast.stmt]) -> None:
        for stmt in stmts:
            if self.current.is_terminated:
                break
            self._visit(stmt)

    def _terminate(self, stmt: ast.stmt) -> None:
        self.current.statements.append(lower_statement(stmt))
        self.current.is_terminated = True
        self.current.add_successor(self.exit)

    def _visit(self, stmt: ast.stmt) -> None:
        match stmt:
            case ast.Return() | ast.Raise():
                self._terminate(stmt)

            case ast.If():
                self._visit_if(stmt)

            case ast.While():
                self._visit_while(stmt)

            case ast.For() | ast.AsyncFor():
                self._visit_for(stmt)

            case ast.Try():
                self._visit_try(cast(_TryLike, stmt))
            case _ if isinstance(stmt, TryStar):
                self._visit_try(cast(_TryLike, stmt))

            case ast.With() | ast.AsyncWith():
                self._visit_with(stmt)

            case ast.Match():
                self._visit_match(stmt)

            case _:
                self.current.statements.append(lower_statement(stmt))

    # ---------- Control Flow ----------

    def _visit_if(self, stmt: ast.If) -> None:
        then_block = self.create_block()
        else_block = self.create_block()
        after_block = self.create_block()

        self._emit_condition(stmt.test, then_block, else_block)

        self.current = then_block
        self._visit_statements(stmt.body)
        if not self.current.is_terminated:
            self.current.add_successor(after_block)

        self.current = else_block
        self._visit_statements(stmt.orelse)
        if not self.current.is_terminated:
            self.current.add_successor(after_block)

        self.current = after_block

    def _visit_while(self, stmt: ast.While) -> None:
        cond_block = self.create_block()
        body_block = self.create_block()
        after_block = self.create_block()

        self.current.add_successor(cond_block)

        self.current = cond_block
        self._emit_condition(stmt.test, body_block, after_block)

        self.current = body_block
        self._visit_statements(stmt.body)
        if not self.current.is_terminated:
            self.current.add_successor(cond_block)

        self.current = after_block

    def _visit_for(self, stmt: ast.For | ast.AsyncFor) -> None:
        iter_block = self.create_block()
        body_block = self.create_block()
        after_block = self.create_block()

        self.current.add_successor(iter_block)

        self.current = iter_block
        self.current.statements.append(Eval(expr=_text(stmt.iter)))
        self.current.add_successor(body_block)
        self.current.add_successor(after_block)

        self.current = body_block
        self.current.statements.append(
            Assign(target=_text(stmt.target), value=f"next({_text(stmt.iter)})")
        )
        self._visit_statements(stmt.body)
        if not self.current.is_terminated:
            self.current.add_successor(iter_block)

        self.current = after_block

    def _visit_with(self, stmt: ast.With | ast.AsyncWith) -> None:
        body_block = self.create_block()
        after_block = self.create_block()

        for item in stmt.items:
            if item.optional_vars is None:
                self.current.statements.append(Eval(expr=_text(item.context_expr)))
            else:
                self.current.statements.append(
                    _lower_value(_text(item.optional_vars), item.context_expr)
                )

        self.current.add_successor(body_block)

        self.current = body_block
        self._visit_statements(stmt.body)
        if not self.current.is_terminated:
            self.current.add_successor(after_block)

        self.current = after_block

    def _visit_try(self, stmt: _TryLike) -> None:
        try_entry = self.create_block()
        self.current.add_successor(try_entry)
        self.current = try_entry

        handlers_blocks = [self.create_block() for _ in stmt.handlers]
        else_block = self.create_block() if stmt.orelse else None
        final_block = self.create_block()

        # Only statements that can raise are linked to the handlers
        for stmt_node in stmt.body:
            if self.current.is_terminated:
                break

            if _stmt_can_raise(stmt_node):
                for h_block in handlers_blocks:
                    self.current.add_successor(h_block)

            self._visit(stmt_node)

        if not self.current.is_terminated:
            if else_block:
                self.current.add_successor(else_block)
            else:
                self.current.add_successor(final_block)

        for handler, h_block in zip(stmt.handlers, handlers_blocks, strict=True):
            self.current = h_block
            if handler.type:
                if handler.name:
                    self.current.statements.append(
                        Assign(target=handler.name, value=_text(handler.type))
                    )
                else:
                    self.current.statements.append(Eval(expr=_text(handler.type)))

            self._visit_statements(handler.body)
            if not self.current.is_terminated:
                self.current.add_successor(final_block)

        if else_block:
            self.current = else_block
            self._visit_statements(stmt.orelse)
            if not self.current.is_terminated:
                self.current.add_successor(final_block)

        self.current = final_block
        if stmt.finalbody:
            self._visit_statements(stmt.finalbody)

    def _visit_match(self, stmt: ast.Match) -> None:
        self.current.statements.append(Eval(expr=_text(stmt.subject)))

        subject_block = self.current
        after_block = self.create_block()

        for case_ in stmt.cases:
            case_block = self.create_block()
            subject_block.add_successor(case_block)

            self.current = case_block
            pattern = f"case {_text(case_.pattern)}"
            if case_.guard is not None:
                pattern = f"{pattern} if {_text(case_.guard)}"
            self.current.statements.append(Cond(test=pattern))

            self._visit_statements(case_.body)
            if not self.current.is_terminated:
                self.current.add_successor(after_block)

        self.current = after_block

    def _emit_condition(
        self, test: ast.expr, true_block: _Block, false_block: _Block
    ) -> None:
        if isinstance(test, ast.BoolOp) and isinstance(test.op, (ast.And, ast.Or)):
            self._emit_boolop(test, true_block, false_block)
            return

        self.current.statements.append(Cond(test=_text(test)))
        self.current.add_successor(true_block)
        self.current.add_successor(false_block)

    def _emit_boolop(
        self, test: ast.BoolOp, true_block: _Block, false_block: _Block
    ) -> None:
        values = test.values
        op = test.op
        current = self.current

        for idx, value in enumerate(values):
            current.statements.append(Cond(test=_text(value)))
            is_last = idx == len(values) - 1

            if is_last:
                current.add_successor(true_block)
                current.add_successor(false_block)
            elif isinstance(op, ast.And):
                next_block = self.create_block()
                current.add_successor(next_block)
                current.add_successor(false_block)
                current = next_block
            else:
                next_block = self.create_block()
                current.add_successor(true_block)
                current.add_successor(next_block)
                current = next_block

        self.current = current


def _stmt_can_raise(stmt: ast.stmt) -> bool:
    if isinstance(stmt, ast.Raise):
        return True

    for node in ast.walk(stmt):
        if isinstance(
            node,
            (
                ast.Call,
                ast.Attribute,
                ast.Subscript,
                ast.Await,
                ast.YieldFrom,
            ),
        ):
            return True

    return False
