from __future__ import annotations

import pytest

from jyotish_core.attributes import (
    NAKSHATRA_GANA,
    NAKSHATRA_NADI,
    NAKSHATRA_YONI,
    Gana,
    Nadi,
    Nakshatra,
    Planet,
    Rashi,
    Varna,
    VashyaGroup,
    Yoni,
    nakshatra_catalog,
    parse_enum,
    rashi_catalog,
    rashi_for,
    rashis_of,
)


def test_closed_set_sizes():
    assert len(Nakshatra) == 27
    assert len(Rashi) == 12
    assert len(Yoni) == 14
    assert len(Planet) == 9
    assert len(VashyaGroup) == 5
    assert [n.value for n in Nakshatra] == list(range(1, 28))
    assert [r.value for r in Rashi] == list(range(1, 13))


def test_varna_ranking():
    assert Varna.BRAHMIN.rank > Varna.KSHATRIYA.rank > Varna.VAISHYA.rank > Varna.SHUDRA.rank


@pytest.mark.parametrize(
    "enum_cls, raw, expected",
    [
        (Nakshatra, 5, Nakshatra.MRIGASHIRA),
        (Nakshatra, "14", Nakshatra.CHITRA),
        (Nakshatra, "purva phalguni", Nakshatra.PURVA_PHALGUNI),
        (Nakshatra, "Moola", Nakshatra.MULA),
        (Rashi, "Dhanu", Rashi.SAGITTARIUS),
        (Gana, "deva", Gana.DEVA),
        (Yoni, "Goat", Yoni.SHEEP),
        (VashyaGroup, "Keeta", VashyaGroup.VASHYA),
        (Planet, Planet.KETU, Planet.KETU),
    ],
)
def test_parse_enum_accepts_names_ordinals_and_aliases(enum_cls, raw, expected):
    assert parse_enum(enum_cls, raw) is expected


@pytest.mark.parametrize(
    "enum_cls, raw",
    [(Nakshatra, 0), (Nakshatra, 28), (Rashi, "13"), (Gana, "Asura"), (Nadi, ""), (Yoni, None), (Gana, True), (Gana, 1)],
)
def test_parse_enum_rejects_values_outside_closed_set(enum_cls, raw):
    with pytest.raises(ValueError):
        parse_enum(enum_cls, raw)


def test_pada_to_rashi_quarters():
    assert rashi_for(Nakshatra.ASHWINI, 1) is Rashi.ARIES
    assert rashi_for(Nakshatra.KRITTIKA, 1) is Rashi.ARIES
    assert rashi_for(Nakshatra.KRITTIKA, 2) is Rashi.TAURUS
    assert rashi_for(Nakshatra.REVATI, 4) is Rashi.PISCES
    assert rashis_of(Nakshatra.MRIGASHIRA) == (Rashi.TAURUS, Rashi.GEMINI)
    assert rashis_of(Nakshatra.ROHINI) == (Rashi.TAURUS,)
    with pytest.raises(ValueError):
        rashi_for(Nakshatra.ASHWINI, 5)


def test_every_rashi_holds_nine_padas():
    counts = {r: 0 for r in Rashi}
    for n in Nakshatra:
        for pada in range(1, 5):
            counts[rashi_for(n, pada)] += 1
    assert set(counts.values()) == {9}


def test_nakshatra_tables_are_balanced():
    # nine nakshatras per gana and per nadi; every yoni animal is used
    for gana in Gana:
        assert sum(1 for g in NAKSHATRA_GANA.values() if g is gana) == 9
    for nadi in Nadi:
        assert sum(1 for v in NAKSHATRA_NADI.values() if v is nadi) == 9
    assert set(NAKSHATRA_YONI.values()) == set(Yoni)


def test_catalogs_are_ordered():
    naks = nakshatra_catalog()
    assert naks[0] == {"id": 1, "name": "Ashwini"}
    assert naks[-1] == {"id": 27, "name": "Revati"}
    rashis = rashi_catalog()
    assert len(rashis) == 12
    assert rashis[8] == {"id": 9, "name": "Sagittarius"}
