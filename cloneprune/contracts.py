"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

REPORT_SCHEMA_VERSION: Final = "1.0"

DEFAULT_CLONE_SUFFIX: Final = "_clone"
PASS_NAME: Final = "clone_prune"

# Unit property flags
PROP_CFG: Final = "cfg"

TODO_NONE: Final = 0

DUMP_HEADER: Final = "===== Dummy Pass Diagnostic Dump ====="
DUMP_BLOCK_COUNT: Final = "===== Basic block count: {count} ====="
DUMP_STMT_COUNT: Final = "----- Statement count: {count} -----"
VERDICT_PRUNE: Final = "PRUNE: {name}"
VERDICT_NOPRUNE: Final = "NOPRUNE: {name}"


class ExitCode(IntEnum):
    SUCCESS = 0
    CONTRACT_ERROR = 2
    INTERNAL_ERROR = 5


EXIT_CODE_DESCRIPTIONS: Final[tuple[tuple[ExitCode, str], ...]] = (
    (ExitCode.SUCCESS, "success"),
    (
        ExitCode.CONTRACT_ERROR,
        (
            "contract error (source file missing or unparsable, unknown root "
            "function, invalid output extensions)"
        ),
    ),
    (
        ExitCode.INTERNAL_ERROR,
        "internal error (unexpected exception)",
    ),
)


def cli_help_epilog() -> str:
    lines = ["Exit codes"]
    for code, description in EXIT_CODE_DESCRIPTIONS:
        lines.append(f"  - {int(code)} - {description}")
    return "\n".join(lines)
