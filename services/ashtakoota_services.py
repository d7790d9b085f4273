"""ashtakoota_services
================================================================================
Aggregation of the eight Koota results into a CompatibilityReport and the
AshtakootaScorer facade that callers (HTTP router, CLI) go through.

Public API
----------
- Tier, classify_total(total) -> Tier
- CompatibilityReport, aggregate(results, warnings) -> CompatibilityReport
- AshtakootaScorer(store=None, strict_tradition=False)
    .score(profile_id_a, profile_id_b)
    .score_charts(chart_a, chart_b)
    .score_for_viewer(viewer_profile_id, target_profile_id)
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from jyotish_core.chart import BirthChart
from jyotish_core.errors import MissingChartData, SelfComparison
from services.dosha_services import DoshaWarning, evaluate_doshas
from services.koota_services import TOTAL_MAX_SCORE, Koota, KootaResult, koota_rules
from services.profile_store import ProfileStore, normalize_profile_id, resolve_chart

logger = logging.getLogger(__name__)

ChartInput = Union[BirthChart, Mapping[str, Any]]

MIN_MATCH_SCORE = 18


class Tier(str, Enum):
    NOT_RECOMMENDED = "NotRecommended"
    AVERAGE = "Average"
    GOOD = "Good"
    EXCELLENT = "Excellent"


# Inclusive bands on the integer part of the total.
TIER_BANDS: Tuple[Tuple[int, int, Tier], ...] = (
    (0, 17, Tier.NOT_RECOMMENDED),
    (18, 24, Tier.AVERAGE),
    (25, 32, Tier.GOOD),
    (33, 36, Tier.EXCELLENT),
)

RECOMMENDATIONS: Dict[Tier, str] = {
    Tier.EXCELLENT: "Highly compatible match. Proceed with confidence.",
    Tier.GOOD: "Good compatibility. A favorable match.",
    Tier.AVERAGE: "Average compatibility. Consider other factors.",
    Tier.NOT_RECOMMENDED: "Low compatibility. Careful consideration advised.",
}


def classify_total(total: float) -> Tier:
    """Map a 0-36 total onto its tier; a half point stays in the tier of its floor."""
    if isinstance(total, bool) or not 0 <= total <= TOTAL_MAX_SCORE:
        raise ValueError(f"total score {total!r} outside 0..{TOTAL_MAX_SCORE}")
    whole = math.floor(total)
    for low, high, tier in TIER_BANDS:
        if low <= whole <= high:
            return tier
    raise ValueError(f"no tier covers total score {total!r}")


@dataclass(frozen=True)
class CompatibilityReport:
    kootas: Tuple[KootaResult, ...]
    total_score: float
    tier: Tier
    dosha_warnings: Tuple[DoshaWarning, ...] = ()
    max_score: int = TOTAL_MAX_SCORE

    @property
    def percentage(self) -> int:
        # half-up, not banker's rounding
        return int(math.floor(self.total_score * 100.0 / self.max_score + 0.5))

    @property
    def recommendation(self) -> str:
        return RECOMMENDATIONS[self.tier]

    @property
    def can_match(self) -> bool:
        return self.total_score >= MIN_MATCH_SCORE

    def koota(self, koota: Koota) -> KootaResult:
        for result in self.kootas:
            if result.koota is koota:
                return result
        raise KeyError(koota)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kootas": [k.to_dict() for k in self.kootas],
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "tier": self.tier.value,
            "doshaWarnings": [w.to_dict() for w in self.dosha_warnings],
            "percentage": self.percentage,
            "recommendation": self.recommendation,
            "canMatch": self.can_match,
        }


def aggregate(results: Sequence[KootaResult], warnings: Sequence[DoshaWarning] = ()) -> CompatibilityReport:
    """Sum the eight Koota results, classify the total and attach dosha warnings."""
    order = tuple(r.koota for r in results)
    if order != tuple(Koota):
        raise ValueError(f"expected kootas in order {[k.label for k in Koota]}, got {[k.label for k in order]}")
    total = sum(r.score for r in results)
    return CompatibilityReport(
        kootas=tuple(results),
        total_score=total,
        tier=classify_total(total),
        dosha_warnings=tuple(warnings),
    )


def _as_chart(chart: ChartInput) -> BirthChart:
    if isinstance(chart, BirthChart):
        return chart
    return BirthChart.from_mapping(chart)


class AshtakootaScorer:
    """Entry point for Guna Milan scoring.

    Charts are resolved through the profile store (for identifiers) or parsed
    strictly (for raw mappings) before any rule runs, so a failure never
    leaves a partial report behind.
    """

    def __init__(self, store: Optional[ProfileStore] = None, *, strict_tradition: bool = False):
        self.store = store
        self.strict_tradition = strict_tradition
        self._rules = koota_rules(strict_tradition)

    def score_charts(self, chart_a: ChartInput, chart_b: ChartInput) -> CompatibilityReport:
        a = _as_chart(chart_a)
        b = _as_chart(chart_b)
        results = tuple(rule(a, b) for rule in self._rules)
        report = aggregate(results, evaluate_doshas(a, b))
        logger.debug(
            "Guna Milan %s/%s -> %s/%s (%s)",
            a.nakshatra.display_name,
            b.nakshatra.display_name,
            report.total_score,
            report.max_score,
            report.tier.value,
        )
        return report

    def score(self, profile_id_a: Any, profile_id_b: Any) -> CompatibilityReport:
        pid_a, pid_b = self._distinct_ids(profile_id_a, profile_id_b)
        chart_a = resolve_chart(self._require_store(), pid_a)
        chart_b = resolve_chart(self._require_store(), pid_b)
        report = self.score_charts(chart_a, chart_b)
        logger.info("Guna Milan calculated: %s <-> %s = %s/36", pid_a, pid_b, report.total_score)
        return report

    def score_for_viewer(self, viewer_profile_id: Any, target_profile_id: Any) -> CompatibilityReport:
        """Score the caller's own profile (as A) against a target profile (as B)."""
        viewer_id, target_id = self._distinct_ids(viewer_profile_id, target_profile_id)
        store = self._require_store()
        if store.get(viewer_id) is None:
            raise MissingChartData("Your profile not found", profile_id=viewer_id)
        chart_a = resolve_chart(store, viewer_id)
        chart_b = resolve_chart(store, target_id)
        report = self.score_charts(chart_a, chart_b)
        logger.info("Horoscope match for viewer %s with %s = %s/36", viewer_id, target_id, report.total_score)
        return report

    def _require_store(self) -> ProfileStore:
        if self.store is None:
            raise MissingChartData("No profile store configured; charts cannot be resolved by id")
        return self.store

    @staticmethod
    def _distinct_ids(profile_id_a: Any, profile_id_b: Any) -> Tuple[str, str]:
        pid_a = normalize_profile_id(profile_id_a)
        pid_b = normalize_profile_id(profile_id_b)
        if pid_a == pid_b:
            raise SelfComparison(f"Cannot match profile {pid_a} with itself", field="profileId", value=pid_a)
        return pid_a, pid_b
