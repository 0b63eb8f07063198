import json

from cloneprune.contracts import REPORT_SCHEMA_VERSION
from cloneprune.prune import GroupVerdict, Verdict
from cloneprune.report import to_json_report, to_text_report

VERDICTS = [
    GroupVerdict("foo", "foo", ("foo", "foo_clone"), Verdict.PRUNABLE, 1),
    GroupVerdict(
        "bar", "bar", ("bar", "bar_clone", "bar_clone2"), Verdict.NOT_PRUNABLE, 1
    ),
]


def test_to_json_report() -> None:
    payload = json.loads(to_json_report(VERDICTS, {"source": "a.py"}))
    assert payload["meta"] == {
        "source": "a.py",
        "report_schema_version": REPORT_SCHEMA_VERSION,
    }
    assert payload["groups"][0] == {
        "key": "foo",
        "reference": "foo",
        "members": ["foo", "foo_clone"],
        "verdict": "prune",
        "comparisons": 1,
    }
    assert payload["groups"][1]["verdict"] == "noprune"
    assert payload["summary"] == {"groups": 2, "prunable": 1, "not_prunable": 1}


def test_to_json_report_empty() -> None:
    payload = json.loads(to_json_report([]))
    assert payload["groups"] == []
    assert payload["summary"]["groups"] == 0


def test_to_text_report() -> None:
    text = to_text_report(meta={"source": "a.py"}, verdicts=VERDICTS)
    assert text.startswith("REPORT METADATA\n")
    assert "source: a.py" in text
    assert "=== Clone group #1 (key=foo, count=2) ===" in text
    assert "=== Clone group #2 (key=bar, count=3) ===" in text
    assert "verdict: noprune" in text
    assert "- bar_clone2" in text
    assert text.endswith("\n")


def test_to_text_report_empty() -> None:
    text = to_text_report(meta={}, verdicts=[])
    assert text.endswith("(none)\n")
