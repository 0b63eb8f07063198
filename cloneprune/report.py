"""
ClonePrune — CFG-based clone pruning analysis
for lowered compilation units.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from .contracts import REPORT_SCHEMA_VERSION
from .prune import GroupVerdict


def _verdict_payload(verdict: GroupVerdict) -> dict[str, object]:
    return {
        "key": verdict.key,
        "reference": verdict.reference,
        "members": list(verdict.members),
        "verdict": verdict.verdict.value,
        "comparisons": verdict.comparisons,
    }


def to_json_report(
    verdicts: Sequence[GroupVerdict],
    meta: Mapping[str, object] | None = None,
) -> str:
    meta_payload = dict(meta or {})
    meta_payload["report_schema_version"] = REPORT_SCHEMA_VERSION
    return json.dumps(
        {
            "meta": meta_payload,
            "groups": [_verdict_payload(v) for v in verdicts],
            "summary": {
                "groups": len(verdicts),
                "prunable": sum(1 for v in verdicts if v.prunable),
                "not_prunable": sum(1 for v in verdicts if not v.prunable),
            },
        },
        ensure_ascii=False,
        indent=2,
    )


def to_text_report(
    *,
    meta: Mapping[str, object],
    verdicts: Sequence[GroupVerdict],
) -> str:
    """Deterministic TXT report, groups in decision order."""
    lines = ["REPORT METADATA"]
    lines.append(f"Report schema version: {REPORT_SCHEMA_VERSION}")
    for key in sorted(meta):
        lines.append(f"{key}: {meta[key]}")

    if not verdicts:
        lines.extend(["", "(none)"])

    for i, v in enumerate(verdicts):
        lines.append("")
        lines.append(
            f"=== Clone group #{i + 1} (key={v.key}, count={len(v.members)}) ==="
        )
        lines.append(f"verdict: {v.verdict.value}")
        lines.append(f"comparisons: {v.comparisons}")
        lines.extend(f"- {name}" for name in v.members)
    return "\n".join(lines).strip() + "\n"
