"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import ast
from pathlib import Path

from .cfg import CFGBuilder
from .contracts import PROP_CFG
from .errors import FileProcessingError, ParseError
from .ir_model import CompilationUnit, Function

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class _QualnameBuilder(ast.NodeVisitor):
    __slots__ = ("stack", "units")

    def __init__(self) -> None:
        self.stack: list[str] = []
        self.units: list[tuple[str, ast.FunctionDef | ast.AsyncFunctionDef]] = []

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self.stack.append(node.name)
        self.generic_visit(node)
        self.stack.pop()

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        name = ".".join([*self.stack, node.name]) if self.stack else node.name
        self.units.append((name, node))

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        name = ".".join([*self.stack, node.name]) if self.stack else node.name
        self.units.append((name, node))


def unit_from_source(source: str, source_name: str = "<unit>") -> CompilationUnit:
    """
    Parse Python source and lower every function into a compilation unit.

    Functions and methods keep their source order; methods are named
    ``Class.method``. Nested functions are part of their parent's body and
    do not become separate unit functions.

    Raises:
        ParseError: if the source is not valid Python.
    """
    try:
        tree = ast.parse(source, filename=source_name)
    except (SyntaxError, ValueError) as e:
        raise ParseError(f"Failed to parse {source_name}: {e}") from e

    qb = _QualnameBuilder()
    qb.visit(tree)

    functions: list[Function] = [
        CFGBuilder().build(qualname, node) for qualname, node in qb.units
    ]
    return CompilationUnit(
        functions=tuple(functions),
        properties=frozenset({PROP_CFG}),
        source_name=source_name,
    )


def unit_from_path(path: str | Path) -> CompilationUnit:
    filepath = Path(path)
    try:
        st_size = filepath.stat().st_size
        if st_size > MAX_FILE_SIZE:
            raise FileProcessingError(
                f"File too large: {st_size} bytes (max {MAX_FILE_SIZE})"
            )
        source = filepath.read_text("utf-8")
    except UnicodeDecodeError as e:
        raise FileProcessingError(f"Encoding error in {filepath}: {e}") from e
    except OSError as e:
        raise FileProcessingError(f"Cannot read file {filepath}: {e}") from e

    return unit_from_source(source, source_name=str(filepath))
