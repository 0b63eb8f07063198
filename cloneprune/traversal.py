"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, TextIO

from .contracts import (
    DUMP_BLOCK_COUNT,
    DUMP_HEADER,
    DUMP_STMT_COUNT,
    VERDICT_NOPRUNE,
    VERDICT_PRUNE,
)
from .ir_model import Function, Statement
from .pretty import render_statement

if TYPE_CHECKING:
    from .prune import GroupVerdict

StatementRef = tuple[int, int, Statement]


class StatementWalk:
    """
    Restartable walk over a function's statements.

    Yields ``(block_index, statement_index, statement)`` with blocks in
    canonical order and statements in program order. Every ``iter()`` call
    starts a fresh walk.
    """

    __slots__ = ("function",)

    def __init__(self, function: Function) -> None:
        self.function = function

    def __iter__(self) -> Iterator[StatementRef]:
        for block in self.function.blocks:
            for stmt_index, stmt in enumerate(block.statements):
                yield block.index, stmt_index, stmt


def iter_statements(function: Function) -> StatementWalk:
    return StatementWalk(function)


class DiagnosticDump:
    """
    Plain-text diagnostic writer.

    All writes are skipped when no sink is configured. The first failed
    write disables the dump for the rest of the run.
    """

    __slots__ = ("failed", "sink")

    def __init__(self, sink: TextIO | None) -> None:
        self.sink = sink
        self.failed = False

    @property
    def enabled(self) -> bool:
        return self.sink is not None and not self.failed

    def write_line(self, text: str) -> None:
        if self.sink is None or self.failed:
            return
        try:
            self.sink.write(f"{text}\n")
        except (OSError, ValueError):
            # ValueError covers closed streams and UnicodeEncodeError
            self.failed = True

    def header(self) -> None:
        self.write_line(DUMP_HEADER)

    def function(self, function: Function) -> None:
        if not self.enabled:
            return
        walk = iter(iter_statements(function))
        pending = next(walk, None)
        stmt_cnt = 0
        # Empty blocks never show up in the walk but still get a header
        for bb_cnt, block in enumerate(function.blocks, start=1):
            self.write_line(DUMP_BLOCK_COUNT.format(count=bb_cnt))
            while pending is not None and pending[0] == block.index:
                stmt_cnt += 1
                self.write_line(DUMP_STMT_COUNT.format(count=stmt_cnt))
                self.write_line(render_statement(pending[2]))
                pending = next(walk, None)

    def verdict(self, verdict: GroupVerdict) -> None:
        template = VERDICT_PRUNE if verdict.prunable else VERDICT_NOPRUNE
        self.write_line(template.format(name=verdict.reference))
