from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest

from cloneprune import cli
from cloneprune.contracts import ExitCode

SOURCE = """
def foo(x):
    y = x * 2
    return y


def foo_clone(x):
    y = x * 2
    return y


def bar(x):
    return x


def bar_clone(x):
    return -x
"""


def _write_source(tmp_path: Path, text: str = SOURCE) -> Path:
    src = tmp_path / "unit.py"
    src.write_text(text, "utf-8")
    return src


def _run_main(monkeypatch: pytest.MonkeyPatch, args: list[str]) -> None:
    monkeypatch.setattr(sys, "argv", ["cloneprune", *args])
    cli.main()


def test_cli_summary(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    _run_main(monkeypatch, [str(src), "--no-color"])
    out = capsys.readouterr().out
    assert "Analysis Summary" in out
    assert "Prunable" in out
    assert "Not prunable" in out


def test_cli_dump_to_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    dump = tmp_path / "dump.txt"
    _run_main(monkeypatch, [str(src), "--dump", str(dump), "--quiet"])

    text = dump.read_text("utf-8")
    assert text.startswith("===== Dummy Pass Diagnostic Dump =====\n")
    assert text.splitlines()[-2:] == ["PRUNE: foo", "NOPRUNE: bar"]
    out = capsys.readouterr().out
    assert "groups=2 prunable=1 not_prunable=1" in out


def test_cli_dump_is_repeatable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    src = _write_source(tmp_path)
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    _run_main(monkeypatch, [str(src), "--dump", str(first), "--quiet"])
    _run_main(monkeypatch, [str(src), "--dump", str(second), "--quiet"])
    assert first.read_bytes() == second.read_bytes()


EXPECTED_DUMP = (
    "===== Dummy Pass Diagnostic Dump =====\n"
    "===== Basic block count: 1 =====\n"
    "----- Statement count: 1 -----\n"
    "y = x * 2;\n"
    "----- Statement count: 2 -----\n"
    "return y;\n"
    "===== Basic block count: 1 =====\n"
    "----- Statement count: 1 -----\n"
    "y = x * 2;\n"
    "----- Statement count: 2 -----\n"
    "return y;\n"
    "===== Basic block count: 1 =====\n"
    "----- Statement count: 1 -----\n"
    "return x;\n"
    "===== Basic block count: 1 =====\n"
    "----- Statement count: 1 -----\n"
    "return -x;\n"
    "PRUNE: foo\n"
    "NOPRUNE: bar\n"
)


def test_cli_dump_to_stdout_is_exact(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    _run_main(monkeypatch, [str(src), "--dump", "-", "--no-color"])
    captured = capsys.readouterr()
    assert captured.out == EXPECTED_DUMP
    assert "Analysis Summary" in captured.err
    assert "Done in" in captured.err


def test_cli_dump_to_ascii_stdout_keeps_running(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(
        tmp_path,
        "def fé():\n    return 1\n\n\ndef fé_clone():\n    return 1\n",
    )
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
    monkeypatch.setattr(sys, "stdout", stdout)
    _run_main(monkeypatch, [str(src), "--dump", "-", "--quiet", "--no-color"])
    err = capsys.readouterr().err
    assert "Diagnostic dump is incomplete" in err
    assert "groups=1 prunable=1 not_prunable=0" in err


def test_cli_reports(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    src = _write_source(tmp_path)
    json_out = tmp_path / "out" / "report.json"
    text_out = tmp_path / "report.txt"
    _run_main(
        monkeypatch,
        [str(src), "--json", str(json_out), "--text", str(text_out), "--quiet"],
    )
    payload = json.loads(json_out.read_text("utf-8"))
    assert [g["reference"] for g in payload["groups"]] == ["foo", "bar"]
    assert payload["meta"]["clone_suffix"] == "_clone"
    assert "verdict: prune" in text_out.read_text("utf-8")


def test_cli_verbose_lists_groups(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    _run_main(monkeypatch, [str(src), "--verbose", "--no-color"])
    out = capsys.readouterr().out
    assert "PRUNE foo (foo, foo_clone)" in out
    assert "NOPRUNE bar (bar, bar_clone)" in out


def test_cli_root_option(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    _run_main(monkeypatch, [str(src), "--root", "bar", "--quiet"])
    out = capsys.readouterr().out
    assert "Functions: 2 groups=1 prunable=0 not_prunable=1" in out


def test_cli_missing_source(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, [str(tmp_path / "missing.py"), "--quiet"])
    assert exc.value.code == ExitCode.CONTRACT_ERROR
    assert "Source file not found" in capsys.readouterr().out


def test_cli_parse_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path, "def f(:\n")
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, [str(src), "--quiet"])
    assert exc.value.code == ExitCode.CONTRACT_ERROR
    out = capsys.readouterr().out
    assert "CONTRACT ERROR" in out
    assert "Failed to parse" in out


def test_cli_unknown_root(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, [str(src), "--root", "nope", "--quiet"])
    assert exc.value.code == ExitCode.CONTRACT_ERROR
    assert "not part of the unit" in capsys.readouterr().out


def test_cli_empty_suffix(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, [str(src), "--suffix", "", "--quiet"])
    assert exc.value.code == ExitCode.CONTRACT_ERROR
    assert "Clone suffix" in capsys.readouterr().out


def test_cli_invalid_report_extension(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, [str(src), "--json", str(tmp_path / "r.txt")])
    assert exc.value.code == ExitCode.CONTRACT_ERROR
    assert "Invalid JSON output extension" in capsys.readouterr().out


def test_cli_internal_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _write_source(tmp_path)

    def _boom(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(cli, "unit_from_path", _boom)
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, [str(src), "--quiet"])
    assert exc.value.code == ExitCode.INTERNAL_ERROR
    out = capsys.readouterr().out
    assert "INTERNAL ERROR" in out
    assert "RuntimeError: kaboom" in out


def test_is_debug_enabled() -> None:
    assert cli._is_debug_enabled(argv=["--debug"], environ={})
    assert cli._is_debug_enabled(argv=[], environ={"CLONEPRUNE_DEBUG": "1"})
    assert not cli._is_debug_enabled(argv=[], environ={})
