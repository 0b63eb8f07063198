"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable

from .contracts import DEFAULT_CLONE_SUFFIX
from .errors import UnitContractError
from .ir_model import Function

CloneGroups = dict[str, list[Function]]


def group_key(name: str, suffix: str = DEFAULT_CLONE_SUFFIX) -> str:
    if not isinstance(name, str) or not name:
        raise UnitContractError("Function identifier must be a non-empty string")
    if suffix and len(name) > len(suffix) and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def build_clone_groups(
    functions: Iterable[Function], suffix: str = DEFAULT_CLONE_SUFFIX
) -> CloneGroups:
    groups: CloneGroups = {}
    for f in functions:
        groups.setdefault(group_key(f.name, suffix), []).append(f)
    return groups
