"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from .config import PassConfig
from .contracts import PASS_NAME, PROP_CFG, TODO_NONE
from .errors import UnitContractError
from .grouping import build_clone_groups
from .ir_model import CompilationUnit
from .prune import GroupVerdict, decide_groups
from .traversal import DiagnosticDump


@dataclass(frozen=True, slots=True)
class PassData:
    name: str
    properties_required: frozenset[str] = frozenset()
    properties_provided: frozenset[str] = frozenset()
    properties_destroyed: frozenset[str] = frozenset()
    todo_flags_start: int = TODO_NONE
    todo_flags_finish: int = TODO_NONE


@dataclass(frozen=True, slots=True)
class PassResult:
    name: str
    todo_flags: int = TODO_NONE
    verdicts: tuple[GroupVerdict, ...] = field(default_factory=tuple)
    functions_seen: int = 0
    dump_failed: bool = False


class Pass(Protocol):
    @property
    def data(self) -> PassData: ...

    def gate(self, unit: CompilationUnit) -> bool: ...

    def execute(
        self, unit: CompilationUnit, sink: TextIO | None = None
    ) -> PassResult: ...


PASS_DATA_CLONE_PRUNE = PassData(
    name=PASS_NAME,
    properties_required=frozenset({PROP_CFG}),
)


class ClonePrunePass:
    """
    Read-only analysis pass deciding which clone groups are prunable.

    The unit is never modified: functions reachable from the configured
    root are dumped, grouped by clone key, and each group of two or more
    functions gets a single verdict.
    """

    __slots__ = ("config",)

    def __init__(self, config: PassConfig | None = None) -> None:
        self.config = config or PassConfig()

    @property
    def data(self) -> PassData:
        return PASS_DATA_CLONE_PRUNE

    def gate(self, unit: CompilationUnit) -> bool:
        return True

    def execute(
        self, unit: CompilationUnit, sink: TextIO | None = None
    ) -> PassResult:
        dump = DiagnosticDump(sink)
        if self.config.dump_header:
            dump.header()

        functions = list(unit.functions_from(self.config.root))
        for function in functions:
            dump.function(function)

        groups = build_clone_groups(functions, self.config.clone_suffix)
        verdicts: list[GroupVerdict] = []
        for verdict in decide_groups(groups):
            dump.verdict(verdict)
            verdicts.append(verdict)

        return PassResult(
            name=self.data.name,
            todo_flags=self.data.todo_flags_finish,
            verdicts=tuple(verdicts),
            functions_seen=len(functions),
            dump_failed=dump.failed,
        )


class PassPipeline:
    """Ordered set of explicitly registered passes."""

    __slots__ = ("_passes",)

    def __init__(self, passes: Iterable[Pass] = ()) -> None:
        self._passes: list[Pass] = list(passes)

    @property
    def passes(self) -> tuple[Pass, ...]:
        return tuple(self._passes)

    def register(self, pass_: Pass) -> PassPipeline:
        self._passes.append(pass_)
        return self

    def run(
        self, unit: CompilationUnit, sink: TextIO | None = None
    ) -> list[PassResult]:
        properties = set(unit.properties)
        results: list[PassResult] = []

        for pass_ in self._passes:
            data = pass_.data
            missing = data.properties_required - properties
            if missing:
                raise UnitContractError(
                    f"Pass '{data.name}' requires unit properties: "
                    f"{', '.join(sorted(missing))}"
                )
            if not pass_.gate(unit):
                continue

            results.append(pass_.execute(unit, sink))
            properties |= data.properties_provided
            properties -= data.properties_destroyed

        return results
