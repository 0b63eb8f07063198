from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from cloneprune.ir_model import BasicBlock, Function, Statement

FunctionFactory = Callable[..., Function]


@pytest.fixture
def make_function() -> FunctionFactory:
    def _make(name: str, *blocks: Sequence[Statement]) -> Function:
        return Function(
            name=name,
            blocks=tuple(
                BasicBlock(index=i, statements=tuple(stmts))
                for i, stmts in enumerate(blocks)
            ),
        )

    return _make
