from __future__ import annotations

from typing import List

from services.ashtakoota_services import CompatibilityReport


def _fmt(score: float) -> str:
    return f"{score:g}"


def explain_report(report: CompatibilityReport) -> str:
    """Build a human-readable explanation per koota with awarded points, reasons, and meanings."""
    lines: List[str] = []
    for k in report.kootas:
        lines.append(f"{k.name}: {_fmt(k.score)}/{k.max_score} ({k.rationale}) - {k.koota.meaning}")
    lines.append(f"Total: {_fmt(report.total_score)}/{report.max_score} ({report.percentage}%)")
    lines.append(f"Summary: {report.tier.value} - {report.recommendation}")
    for w in report.dosha_warnings:
        lines.append(f"Dosha: {w.type.value} [{w.severity.value}] {w.note}")
    return "\n".join(lines)
