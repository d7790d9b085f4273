"""Manglik dosha evaluation, kept apart from the 36-point score."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from jyotish_core.chart import BirthChart


class DoshaType(str, Enum):
    MANGLIK = "Manglik"


class DoshaSeverity(str, Enum):
    NONE = "None"
    PARTIAL = "Partial"
    FULL = "Full"


@dataclass(frozen=True)
class DoshaWarning:
    type: DoshaType
    present: bool
    severity: DoshaSeverity
    note: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type.value,
            "present": self.present,
            "severity": self.severity.value,
            "note": self.note,
        }


def evaluate_doshas(a: BirthChart, b: BirthChart) -> List[DoshaWarning]:
    """Flag Manglik status conflicts between groom (a) and bride (b).

    Exactly one Manglik partner is a Full dosha; two Manglik partners cancel
    each other and only an informational note is returned; neither gives no
    warning at all.
    """
    if a.is_manglik and b.is_manglik:
        return [
            DoshaWarning(
                DoshaType.MANGLIK,
                True,
                DoshaSeverity.NONE,
                "Both partners are Manglik; mutual Manglik status cancels the dosha",
            )
        ]
    if a.is_manglik or b.is_manglik:
        who = "Groom" if a.is_manglik else "Bride"
        return [
            DoshaWarning(
                DoshaType.MANGLIK,
                True,
                DoshaSeverity.FULL,
                f"{who} is Manglik while the partner is not; remedies may be needed",
            )
        ]
    return []
