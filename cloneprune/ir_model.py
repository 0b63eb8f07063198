"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .contracts import PROP_CFG
from .errors import UnitContractError

# =========================
# Statements
# =========================
#
# Operands are normalized source text produced by the lowering step.


@dataclass(frozen=True, slots=True)
class Assign:
    target: str
    value: str


@dataclass(frozen=True, slots=True)
class Call:
    target: str | None
    callee: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Cond:
    test: str


@dataclass(frozen=True, slots=True)
class Goto:
    label: str


@dataclass(frozen=True, slots=True)
class Return:
    value: str | None = None


@dataclass(frozen=True, slots=True)
class Raise:
    exc: str | None = None


@dataclass(frozen=True, slots=True)
class Eval:
    expr: str


@dataclass(frozen=True, slots=True)
class Nop:
    pass


Statement = Assign | Call | Cond | Goto | Return | Raise | Eval | Nop

STATEMENT_KINDS: tuple[type, ...] = (
    Assign,
    Call,
    Cond,
    Goto,
    Return,
    Raise,
    Eval,
    Nop,
)


def _check_kind(stmt: object) -> None:
    if not isinstance(stmt, STATEMENT_KINDS):
        raise UnitContractError(f"Unknown statement kind: {type(stmt).__name__}")


def statement_eq(a: Statement, b: Statement) -> bool:
    """Structural equality of two statements, decided per variant kind."""
    _check_kind(a)
    _check_kind(b)

    match a:
        case Assign():
            return isinstance(b, Assign) and (a.target, a.value) == (
                b.target,
                b.value,
            )
        case Call():
            return isinstance(b, Call) and (a.target, a.callee, a.args) == (
                b.target,
                b.callee,
                b.args,
            )
        case Cond():
            return isinstance(b, Cond) and a.test == b.test
        case Goto():
            return isinstance(b, Goto) and a.label == b.label
        case Return():
            return isinstance(b, Return) and a.value == b.value
        case Raise():
            return isinstance(b, Raise) and a.exc == b.exc
        case Eval():
            return isinstance(b, Eval) and a.expr == b.expr
        case Nop():
            return isinstance(b, Nop)
        case _:
            raise UnitContractError(f"Unknown statement kind: {type(a).__name__}")


# =========================
# Blocks, functions, units
# =========================

EXIT_BLOCK = -1


@dataclass(frozen=True, slots=True)
class BasicBlock:
    index: int
    statements: tuple[Statement, ...] = ()
    successors: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.statements)


@dataclass(frozen=True, slots=True, eq=False)
class Function:
    name: str
    blocks: tuple[BasicBlock, ...] = ()
    start_line: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise UnitContractError("Function identifier must be a non-empty string")

    @property
    def stmt_count(self) -> int:
        return sum(len(block) for block in self.blocks)


@dataclass(frozen=True, slots=True)
class CompilationUnit:
    functions: tuple[Function, ...] = ()
    properties: frozenset[str] = field(default_factory=lambda: frozenset({PROP_CFG}))
    source_name: str = "<unit>"

    def get(self, name: str) -> Function:
        for function in self.functions:
            if function.name == name:
                return function
        raise UnitContractError(f"Function '{name}' is not part of the unit")

    def functions_from(self, root: Function | str | None = None) -> Iterator[Function]:
        """
        Yield the functions reachable from ``root`` in unit order.

        ``root`` may be a Function, a function name, or None for the first
        function of the unit.
        """
        if root is None:
            yield from self.functions
            return

        if isinstance(root, str):
            root = self.get(root)

        for idx, function in enumerate(self.functions):
            if function is root:
                yield from self.functions[idx:]
                return
        raise UnitContractError(f"Function '{root.name}' is not part of the unit")
