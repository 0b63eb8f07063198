"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import ui_messages as ui


def _summary_value_style(*, label: str, value: int) -> str:
    if value == 0:
        return "dim"
    if label == ui.SUMMARY_LABEL_PRUNABLE:
        return "bold green"
    if label == ui.SUMMARY_LABEL_NOT_PRUNABLE:
        return "bold yellow"
    return "bold"


def _build_summary_rows(
    *,
    functions: int,
    groups: int,
    prunable: int,
    not_prunable: int,
) -> list[tuple[str, int]]:
    return [
        (ui.SUMMARY_LABEL_FUNCTIONS, functions),
        (ui.SUMMARY_LABEL_GROUPS, groups),
        (ui.SUMMARY_LABEL_PRUNABLE, prunable),
        (ui.SUMMARY_LABEL_NOT_PRUNABLE, not_prunable),
    ]


def _build_summary_table(rows: list[tuple[str, int]]) -> Table:
    summary_table = Table(
        title=ui.SUMMARY_TITLE,
        show_header=True,
        width=ui.CLI_LAYOUT_WIDTH,
    )
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    for label, value in rows:
        summary_table.add_row(
            label,
            Text(str(value), style=_summary_value_style(label=label, value=value)),
        )
    return summary_table


def _print_summary(
    *,
    console: Console,
    quiet: bool,
    functions: int,
    groups: int,
    prunable: int,
    not_prunable: int,
) -> None:
    if quiet:
        console.print(
            ui.fmt_summary_compact(
                functions=functions,
                groups=groups,
                prunable=prunable,
                not_prunable=not_prunable,
            )
        )
        return

    rows = _build_summary_rows(
        functions=functions,
        groups=groups,
        prunable=prunable,
        not_prunable=not_prunable,
    )
    console.print(_build_summary_table(rows))
