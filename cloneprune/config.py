"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from dataclasses import dataclass

from .contracts import DEFAULT_CLONE_SUFFIX
from .errors import ValidationError


@dataclass(frozen=True, slots=True)
class PassConfig:
    clone_suffix: str = DEFAULT_CLONE_SUFFIX
    root: str | None = None
    dump_header: bool = True

    def __post_init__(self) -> None:
        if not self.clone_suffix:
            raise ValidationError("Clone suffix must be a non-empty string")
        if self.root is not None and not self.root:
            raise ValidationError("Root function name must not be empty")
