from __future__ import annotations

import pytest

from jyotish_core.errors import InvalidAttribute, MissingChartData, SelfComparison
from services.ashtakoota_services import AshtakootaScorer, Tier, aggregate, classify_total
from services.dosha_services import DoshaSeverity
from services.koota_services import Koota, koota_rules
from tests.conftest import BRIDE, GROOM


@pytest.mark.parametrize(
    "total, tier",
    [
        (0, Tier.NOT_RECOMMENDED),
        (17, Tier.NOT_RECOMMENDED),
        (17.5, Tier.NOT_RECOMMENDED),
        (18, Tier.AVERAGE),
        (24, Tier.AVERAGE),
        (24.5, Tier.AVERAGE),
        (25, Tier.GOOD),
        (32, Tier.GOOD),
        (33, Tier.EXCELLENT),
        (36, Tier.EXCELLENT),
    ],
)
def test_tier_boundaries(total, tier):
    assert classify_total(total) is tier


@pytest.mark.parametrize("total", [-1, 36.5, 40])
def test_tier_rejects_out_of_range(total):
    with pytest.raises(ValueError):
        classify_total(total)


def test_example_scenario_report(groom, bride):
    report = AshtakootaScorer().score_charts(groom, bride)
    assert [k.name for k in report.kootas] == [
        "Varna", "Vashya", "Tara", "Yoni", "GrahaMaitri", "Gana", "Bhakoot", "Nadi",
    ]
    assert report.koota(Koota.YONI).score == 4
    assert report.koota(Koota.NADI).score == 8
    assert report.koota(Koota.VARNA).score == 1
    assert report.koota(Koota.VASHYA).score == 2
    assert report.total_score == sum(k.score for k in report.kootas) == 26.5
    assert report.tier is Tier.GOOD
    assert report.max_score == 36
    assert report.dosha_warnings == ()

    out = report.to_dict()
    assert out["totalScore"] == 26.5
    assert out["maxScore"] == 36
    assert out["tier"] == "Good"
    assert out["percentage"] == 74
    assert out["canMatch"] is True
    assert out["recommendation"] == "Good compatibility. A favorable match."
    assert out["doshaWarnings"] == []


def test_raw_mappings_are_parsed_strictly():
    report = AshtakootaScorer().score_charts(GROOM, BRIDE)
    assert report.total_score == 26.5
    with pytest.raises(InvalidAttribute):
        AshtakootaScorer().score_charts(dict(GROOM, yoni="Unicorn"), BRIDE)
    with pytest.raises(MissingChartData):
        AshtakootaScorer().score_charts({"nakshatra": 5}, BRIDE)


def test_dosha_does_not_change_total(make_chart):
    plain = AshtakootaScorer().score_charts(make_chart(), make_chart(BRIDE))
    flagged = AshtakootaScorer().score_charts(make_chart(isManglik=True), make_chart(BRIDE))
    assert flagged.total_score == plain.total_score
    assert flagged.tier is plain.tier
    assert [w.severity for w in flagged.dosha_warnings] == [DoshaSeverity.FULL]


def test_strict_tradition_changes_bhakoot_only(make_chart):
    a, b = make_chart(rashi=1), make_chart(BRIDE, rashi=2)
    default = AshtakootaScorer().score_charts(a, b)
    strict = AshtakootaScorer(strict_tradition=True).score_charts(a, b)
    assert default.koota(Koota.BHAKOOT).score == 7
    assert strict.koota(Koota.BHAKOOT).score == 0
    assert default.total_score - strict.total_score == 7


def test_aggregate_requires_fixed_order(groom, bride):
    results = [rule(groom, bride) for rule in koota_rules()]
    with pytest.raises(ValueError):
        aggregate(list(reversed(results)))
    with pytest.raises(ValueError):
        aggregate(results[:7])


def test_low_score_cannot_match(make_chart):
    # only Vashya (both Manava) and the Tara half point score; nadi, rashi, yoni, planets and gana all 0
    a = make_chart(nakshatra=1, rashi=1, yoni="Cow", rulingPlanet="Sun", gana="Deva", varna="Shudra")
    b = make_chart(nakshatra=6, rashi=6, yoni="Tiger", rulingPlanet="Saturn", gana="Rakshasa", varna="Brahmin")
    report = AshtakootaScorer().score_charts(a, b)
    assert [k.score for k in report.kootas] == [0, 2, 1.5, 0, 0, 0, 0, 0]
    assert report.total_score == 3.5
    assert report.tier is Tier.NOT_RECOMMENDED
    assert report.can_match is False
    assert report.percentage == 10


def test_score_by_profile_ids(store):
    report = AshtakootaScorer(store).score("p-101", "p-202")
    assert report.total_score == 26.5
    derived = AshtakootaScorer(store).score("p-101", "p-303")
    assert [w.severity for w in derived.dosha_warnings] == [DoshaSeverity.FULL]


def test_self_comparison_rejected_before_lookup(store):
    with pytest.raises(SelfComparison):
        AshtakootaScorer(store).score("p-101", " p-101 ")
    with pytest.raises(SelfComparison):
        AshtakootaScorer().score("x", "x")


def test_missing_and_invalid_profiles(store):
    scorer = AshtakootaScorer(store)
    with pytest.raises(MissingChartData):
        scorer.score("p-101", "ghost")
    with pytest.raises(MissingChartData):
        scorer.score("p-101", "p-404")
    with pytest.raises(InvalidAttribute):
        scorer.score("p-101", "p-505")
    with pytest.raises(MissingChartData):
        AshtakootaScorer().score("p-101", "p-202")


def test_score_for_viewer(store):
    scorer = AshtakootaScorer(store)
    assert scorer.score_for_viewer("p-101", "p-202").total_score == 26.5
    with pytest.raises(MissingChartData, match="Your profile not found"):
        scorer.score_for_viewer("nobody", "p-202")
    with pytest.raises(SelfComparison):
        scorer.score_for_viewer("p-202", "p-202")
