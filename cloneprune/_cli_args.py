"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse

from . import ui_messages as ui
from .contracts import DEFAULT_CLONE_SUFFIX, cli_help_epilog


def build_parser(version: str) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cloneprune",
        description="Decide which clone functions of a unit are safe to prune.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog=cli_help_epilog(),
    )
    ap.add_argument(
        "--version",
        action="version",
        version=ui.version_output(version),
        help=ui.HELP_VERSION,
    )

    core_group = ap.add_argument_group("Target")
    core_group.add_argument(
        "source",
        help=ui.HELP_SOURCE,
    )
    core_group.add_argument(
        "--root",
        metavar="NAME",
        default=None,
        help=ui.HELP_ROOT,
    )

    tune_group = ap.add_argument_group("Analysis Tuning")
    tune_group.add_argument(
        "--suffix",
        default=DEFAULT_CLONE_SUFFIX,
        help=ui.HELP_SUFFIX,
    )

    out_group = ap.add_argument_group("Reporting")
    out_group.add_argument(
        "--dump",
        dest="dump_out",
        metavar="FILE",
        help=ui.HELP_DUMP,
    )
    out_group.add_argument(
        "--json",
        dest="json_out",
        metavar="FILE",
        help=ui.HELP_JSON,
    )
    out_group.add_argument(
        "--text",
        dest="text_out",
        metavar="FILE",
        help=ui.HELP_TEXT,
    )
    out_group.add_argument(
        "--no-color",
        action="store_true",
        help=ui.HELP_NO_COLOR,
    )
    out_group.add_argument(
        "--quiet",
        action="store_true",
        help=ui.HELP_QUIET,
    )
    out_group.add_argument(
        "--verbose",
        action="store_true",
        help=ui.HELP_VERBOSE,
    )
    out_group.add_argument(
        "--debug",
        action="store_true",
        help=ui.HELP_DEBUG,
    )
    return ap
