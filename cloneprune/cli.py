from __future__ import annotations

import os
import sys
import time
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.theme import Theme

from . import __version__
from . import ui_messages as ui
from ._cli_args import build_parser
from ._cli_paths import _validate_output_path
from ._cli_summary import _print_summary
from .config import PassConfig
from .contracts import PASS_NAME, ExitCode
from .errors import ClonePruneError
from .frontend import unit_from_path
from .passes import ClonePrunePass, PassPipeline
from .prune import GroupVerdict
from .report import to_json_report, to_text_report

# Custom theme for Rich
custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
    }
)

STDOUT_SINK = "-"


def _make_console(*, no_color: bool, stderr: bool = False) -> Console:
    return Console(theme=custom_theme, width=100, no_color=no_color, stderr=stderr)


console = _make_console(no_color=False)


def print_banner() -> None:
    console.print(
        Panel(
            ui.banner_title(__version__),
            border_style="blue",
            padding=(0, 2),
            width=ui.CLI_LAYOUT_WIDTH,
            expand=False,
        )
    )


def _is_debug_enabled(
    *,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    args = list(sys.argv[1:] if argv is None else argv)
    debug_from_flag = any(arg == "--debug" for arg in args)
    env = os.environ if environ is None else environ
    debug_from_env = env.get("CLONEPRUNE_DEBUG") == "1"
    return debug_from_flag or debug_from_env


def _contract_exit(message: str) -> NoReturn:
    console.print(ui.fmt_contract_error(message))
    sys.exit(ExitCode.CONTRACT_ERROR)


@contextmanager
def _open_sink(dump_out: str | None) -> Iterator[TextIO | None]:
    if dump_out is None:
        yield None
        return
    if dump_out == STDOUT_SINK:
        yield sys.stdout
        return

    path = Path(dump_out).expanduser()
    try:
        handle = path.open("w", encoding="utf-8")
    except OSError as e:
        _contract_exit(ui.ERR_DUMP_OPEN.format(path=path, error=e))
    with handle:
        yield handle


def _write_report_output(*, out: Path, content: str, label: str) -> None:
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, "utf-8")
    except OSError as e:
        _contract_exit(ui.ERR_REPORT_WRITE.format(label=label, path=out, error=e))


def _main_impl() -> None:
    ap = build_parser(__version__)
    args = ap.parse_args()

    global console
    # stdout carries only the dump when it is the sink
    console = _make_console(
        no_color=args.no_color, stderr=args.dump_out == STDOUT_SINK
    )

    t0 = time.monotonic()

    # Reports are validated before any analysis runs
    json_out = (
        _validate_output_path(
            args.json_out, expected_suffix=".json", label="JSON", console=console
        )
        if args.json_out
        else None
    )
    text_out = (
        _validate_output_path(
            args.text_out, expected_suffix=".txt", label="text", console=console
        )
        if args.text_out
        else None
    )

    if not args.quiet:
        print_banner()

    source_path = Path(args.source).expanduser().resolve()
    if not source_path.is_file():
        _contract_exit(ui.ERR_SOURCE_NOT_FOUND.format(path=source_path))

    if not args.quiet:
        console.print(ui.INFO_ANALYZING_UNIT.format(path=source_path))

    try:
        config = PassConfig(clone_suffix=args.suffix, root=args.root)
        unit = unit_from_path(source_path)
        pipeline = PassPipeline().register(ClonePrunePass(config))
        with _open_sink(args.dump_out) as sink:
            results = pipeline.run(unit, sink)
    except ClonePruneError as e:
        _contract_exit(str(e))

    verdicts: list[GroupVerdict] = []
    functions_seen = 0
    for result in results:
        if result.name != PASS_NAME:
            continue
        verdicts.extend(result.verdicts)
        functions_seen += result.functions_seen
        if result.dump_failed:
            console.print(ui.WARN_DUMP_WRITE_FAILED)

    if (
        not args.quiet
        and args.dump_out is not None
        and args.dump_out != STDOUT_SINK
    ):
        console.print(ui.INFO_DUMP_SAVED.format(path=Path(args.dump_out).resolve()))

    meta: dict[str, object] = {
        "cloneprune_version": __version__,
        "source": str(source_path),
        "clone_suffix": config.clone_suffix,
        "root": config.root or "",
    }
    if json_out is not None:
        _write_report_output(
            out=json_out, content=to_json_report(verdicts, meta), label="JSON"
        )
        if not args.quiet:
            console.print(ui.INFO_JSON_REPORT_SAVED.format(path=json_out))
    if text_out is not None:
        _write_report_output(
            out=text_out,
            content=to_text_report(meta=meta, verdicts=verdicts),
            label="text",
        )
        if not args.quiet:
            console.print(ui.INFO_TEXT_REPORT_SAVED.format(path=text_out))

    if args.verbose:
        for v in verdicts:
            console.print(
                ui.fmt_verdict_line(
                    prunable=v.prunable, reference=v.reference, members=list(v.members)
                )
            )

    prunable = sum(1 for v in verdicts if v.prunable)
    _print_summary(
        console=console,
        quiet=args.quiet,
        functions=functions_seen,
        groups=len(verdicts),
        prunable=prunable,
        not_prunable=len(verdicts) - prunable,
    )

    if not args.quiet:
        elapsed = time.monotonic() - t0
        console.print(f"\n[dim]Done in {elapsed:.1f}s[/dim]")


def main() -> None:
    try:
        _main_impl()
    except SystemExit:
        raise
    except Exception as e:
        console.print(
            ui.fmt_internal_error(e, debug=_is_debug_enabled())
        )
        sys.exit(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    main()
