from __future__ import annotations

import pytest

from jyotish_core.chart import BirthChart
from services.profile_store import InMemoryProfileStore

API_HEADERS = {
    "Authorization": "Bearer test-token",
    "X-Correlation-ID": "11111111-2222-3333-4444-555555555555",
    "X-Transaction-ID": "txn-test-01",
    "X-Session-ID": "sess-test-01",
    "X-App-ID": "pytest",
}

GROOM = {
    "nakshatra": 5,
    "rashi": 2,
    "gana": "Deva",
    "yoni": "Horse",
    "varna": "Kshatriya",
    "nadi": "Adi",
    "vashyaGroup": "Manava",
    "rulingPlanet": "Mars",
    "isManglik": False,
}

BRIDE = {
    "nakshatra": 14,
    "rashi": 9,
    "gana": "Manushya",
    "yoni": "Horse",
    "varna": "Vaishya",
    "nadi": "Madhya",
    "vashyaGroup": "Manava",
    "rulingPlanet": "Jupiter",
    "isManglik": False,
}


@pytest.fixture
def make_chart():
    """Build a BirthChart from the groom sample, overriding any fields."""
    def _make(base=None, **overrides) -> BirthChart:
        data = dict(base or GROOM)
        data.update(overrides)
        return BirthChart.from_mapping(data)
    return _make


@pytest.fixture
def groom(make_chart) -> BirthChart:
    return make_chart(GROOM)


@pytest.fixture
def bride(make_chart) -> BirthChart:
    return make_chart(BRIDE)


@pytest.fixture
def store() -> InMemoryProfileStore:
    return InMemoryProfileStore({
        "p-101": GROOM,
        "p-202": BRIDE,
        # seed only; the rest is derived (Rohini pada 2 -> Taurus)
        "p-303": {"nakshatra": "Rohini", "pada": 2, "isManglik": True},
        "p-404": {"nakshatra": "Ashwini", "rashi": "Aries"},
        "p-505": dict(GROOM, gana="Asura"),
    })
