"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import platform
import shlex
import sys
import traceback
from pathlib import Path

from . import __version__

BANNER_SUBTITLE = "[italic]Clone pruning analysis[/italic]"

MARKER_CONTRACT_ERROR = "[error]CONTRACT ERROR:[/error]"
MARKER_INTERNAL_ERROR = "[error]INTERNAL ERROR:[/error]"

HELP_VERSION = "Print the ClonePrune version and exit."
HELP_SOURCE = "Python source file treated as one compilation unit."
HELP_ROOT = "Traversal root function; functions before it are not analyzed."
HELP_SUFFIX = "Clone marker suffix stripped to derive the group key."
HELP_DUMP = "Write the diagnostic dump to FILE ('-' for stdout)."
HELP_JSON = "Generate a JSON report to FILE."
HELP_TEXT = "Generate a text report to FILE."
HELP_NO_COLOR = "Disable ANSI colors in output."
HELP_QUIET = "Minimize output (still shows warnings and errors)."
HELP_VERBOSE = "List every decided group with its members."
HELP_DEBUG = "Print debug details (traceback and environment) on internal errors."

SUMMARY_TITLE = "Analysis Summary"
CLI_LAYOUT_WIDTH = 40
SUMMARY_LABEL_FUNCTIONS = "Functions analyzed"
SUMMARY_LABEL_GROUPS = "Clone groups"
SUMMARY_LABEL_PRUNABLE = "Prunable"
SUMMARY_LABEL_NOT_PRUNABLE = "Not prunable"
SUMMARY_COMPACT = (
    "Functions: {functions} groups={groups} "
    "prunable={prunable} not_prunable={not_prunable}"
)

INFO_ANALYZING_UNIT = "[info]Analyzing unit:[/info] {path}"
INFO_JSON_REPORT_SAVED = "[info]JSON report saved:[/info] {path}"
INFO_TEXT_REPORT_SAVED = "[info]Text report saved:[/info] {path}"
INFO_DUMP_SAVED = "[info]Diagnostic dump saved:[/info] {path}"

WARN_DUMP_WRITE_FAILED = (
    "[warning]Diagnostic dump is incomplete: writing to the sink failed.[/warning]"
)

ERR_SOURCE_NOT_FOUND = "Source file not found: {path}"
ERR_INVALID_OUTPUT_EXT = (
    "Invalid {label} output extension: {path} (expected {expected_suffix})."
)
ERR_REPORT_WRITE = "Failed to write {label} report {path}: {error}"
ERR_DUMP_OPEN = "Cannot open diagnostic dump {path}: {error}"

VERDICT_PRUNABLE_LINE = "[success]PRUNE[/success] {reference} ({members})"
VERDICT_NOT_PRUNABLE_LINE = "[warning]NOPRUNE[/warning] {reference} ({members})"


def version_output(version: str) -> str:
    return f"ClonePrune {version}"


def banner_title(version: str) -> str:
    return f"[bold white]ClonePrune[/bold white] [dim]v{version}[/dim]\n{BANNER_SUBTITLE}"


def fmt_invalid_output_extension(
    *, label: str, path: Path, expected_suffix: str
) -> str:
    return ERR_INVALID_OUTPUT_EXT.format(
        label=label, path=path, expected_suffix=expected_suffix
    )


def fmt_summary_compact(
    *, functions: int, groups: int, prunable: int, not_prunable: int
) -> str:
    return SUMMARY_COMPACT.format(
        functions=functions,
        groups=groups,
        prunable=prunable,
        not_prunable=not_prunable,
    )


def fmt_verdict_line(*, prunable: bool, reference: str, members: list[str]) -> str:
    template = VERDICT_PRUNABLE_LINE if prunable else VERDICT_NOT_PRUNABLE_LINE
    return template.format(reference=reference, members=", ".join(members))


def fmt_contract_error(message: str) -> str:
    return f"{MARKER_CONTRACT_ERROR}\n{message}"


def fmt_internal_error(
    error: BaseException,
    *,
    debug: bool = False,
) -> str:
    error_name = type(error).__name__
    error_text = str(error).strip() or "<no message>"
    lines = [
        MARKER_INTERNAL_ERROR,
        "Unexpected exception.",
        f"Reason: {error_name}: {error_text}",
        "",
        "Next steps:",
        "- Re-run with --debug to include a traceback.",
    ]
    if not debug:
        return "\n".join(lines)

    traceback_lines = traceback.format_exception(
        type(error), error, error.__traceback__
    )
    lines.extend(
        [
            "",
            "DEBUG DETAILS",
            f"Platform: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            f"ClonePrune: {__version__}",
            f"Command: {shlex.join(sys.argv)}",
            f"CWD: {Path.cwd()}",
            "Traceback:",
            "".join(traceback_lines).rstrip(),
        ]
    )
    return "\n".join(lines)
