"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from .equivalence import functions_equivalent
from .ir_model import Function

EquivalenceCheck = Callable[[Function, Function], bool]


class Verdict(str, Enum):
    PRUNABLE = "prune"
    NOT_PRUNABLE = "noprune"


@dataclass(frozen=True, slots=True)
class GroupVerdict:
    key: str
    reference: str
    members: tuple[str, ...]
    verdict: Verdict
    comparisons: int

    @property
    def prunable(self) -> bool:
        return self.verdict is Verdict.PRUNABLE


def decide_group(
    key: str,
    members: Sequence[Function],
    checker: EquivalenceCheck = functions_equivalent,
) -> GroupVerdict | None:
    """
    Decide one clone group.

    The first member is the reference and is compared with every other member
    in group order. Returns None for groups with fewer than two members.
    """
    if len(members) < 2:
        return None

    reference = members[0]
    verdict = Verdict.PRUNABLE
    comparisons = 0
    for candidate in members[1:]:
        comparisons += 1
        if not checker(reference, candidate):
            verdict = Verdict.NOT_PRUNABLE
            break

    return GroupVerdict(
        key=key,
        reference=reference.name,
        members=tuple(m.name for m in members),
        verdict=verdict,
        comparisons=comparisons,
    )


def decide_groups(
    groups: Mapping[str, Sequence[Function]],
    checker: EquivalenceCheck = functions_equivalent,
) -> Iterator[GroupVerdict]:
    for key, members in groups.items():
        result = decide_group(key, members, checker)
        if result is not None:
            yield result
