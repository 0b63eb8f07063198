"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys
from pathlib import Path

from rich.console import Console

from .contracts import ExitCode
from .ui_messages import fmt_contract_error, fmt_invalid_output_extension


def _validate_output_path(
    path: str,
    *,
    expected_suffix: str,
    label: str,
    console: Console,
) -> Path:
    out = Path(path).expanduser()
    if out.suffix.lower() != expected_suffix:
        console.print(
            fmt_contract_error(
                fmt_invalid_output_extension(
                    label=label, path=out, expected_suffix=expected_suffix
                )
            )
        )
        sys.exit(ExitCode.CONTRACT_ERROR)
    return out.resolve()
