from __future__ import annotations

import pytest

from jyotish_core import (
    BirthChart,
    Gana,
    InvalidAttribute,
    MissingChartData,
    Nadi,
    Nakshatra,
    Planet,
    Rashi,
    Varna,
    VashyaGroup,
    Yoni,
    chart_from_record,
    derive_chart,
)
from tests.conftest import GROOM


def test_from_mapping_parses_camel_and_snake_keys():
    chart = BirthChart.from_mapping(GROOM)
    assert chart.nakshatra is Nakshatra.MRIGASHIRA
    assert chart.rashi is Rashi.TAURUS
    assert chart.vashya_group is VashyaGroup.MANAVA
    assert chart.ruling_planet is Planet.MARS
    assert chart.is_manglik is False

    snake = {k: v for k, v in GROOM.items() if k not in {"vashyaGroup", "rulingPlanet", "isManglik"}}
    snake.update({"vashya_group": "Manava", "ruling_planet": "Mars", "is_manglik": "yes"})
    assert BirthChart.from_mapping(snake).is_manglik is True


def test_to_dict_uses_contract_field_names():
    out = BirthChart.from_mapping(GROOM).to_dict()
    assert out["nakshatra"] == {"id": 5, "name": "Mrigashira"}
    assert out["vashyaGroup"] == "Manava"
    assert out["rulingPlanet"] == "Mars"
    assert out["isManglik"] is False


def test_missing_field_is_missing_chart_data():
    partial = dict(GROOM)
    del partial["nadi"]
    with pytest.raises(MissingChartData) as ei:
        BirthChart.from_mapping(partial)
    assert ei.value.field == "nadi"
    with pytest.raises(MissingChartData):
        BirthChart.from_mapping(None)


@pytest.mark.parametrize("field, value", [("gana", "Asura"), ("yoni", "Dragon"), ("nakshatra", 31), ("isManglik", "maybe")])
def test_out_of_set_value_is_invalid_attribute(field, value):
    with pytest.raises(InvalidAttribute) as ei:
        BirthChart.from_mapping(dict(GROOM, **{field: value}))
    assert ei.value.field == field
    assert ei.value.status_code == 500


def test_direct_construction_rejects_raw_strings():
    with pytest.raises(InvalidAttribute):
        BirthChart(
            nakshatra=Nakshatra.ASHWINI,
            rashi=Rashi.ARIES,
            gana="Deva",
            yoni=Yoni.HORSE,
            varna=Varna.KSHATRIYA,
            nadi=Nadi.ADI,
            vashya_group=VashyaGroup.CHATUSHPADA,
            ruling_planet=Planet.MARS,
            is_manglik=False,
        )


def test_derive_from_pada():
    chart = derive_chart("Rohini", True, pada=2)
    assert chart.rashi is Rashi.TAURUS
    assert chart.gana is Gana.MANUSHYA
    assert chart.yoni is Yoni.SERPENT
    assert chart.nadi is Nadi.ANTYA
    assert chart.varna is Varna.VAISHYA
    assert chart.vashya_group is VashyaGroup.CHATUSHPADA
    assert chart.ruling_planet is Planet.VENUS
    assert chart.is_manglik is True


def test_derive_from_rashi_checks_consistency():
    assert derive_chart(3, False, rashi="Aries").rashi is Rashi.ARIES
    with pytest.raises(InvalidAttribute):
        derive_chart("Krittika", False, rashi="Gemini")
    with pytest.raises(InvalidAttribute):
        derive_chart("Krittika", False, pada=2, rashi="Aries")
    with pytest.raises(InvalidAttribute):
        derive_chart("Krittika", False, pada=7)
    with pytest.raises(MissingChartData):
        derive_chart("Krittika", False)


def test_chart_from_record():
    assert chart_from_record(GROOM, profile_id="p-101").yoni is Yoni.HORSE
    seeded = chart_from_record({"nakshatra": 18, "pada": 4, "manglik": False})
    assert seeded.rashi is Rashi.SCORPIO
    assert seeded.vashya_group is VashyaGroup.VASHYA
    with pytest.raises(MissingChartData) as ei:
        chart_from_record(None, profile_id="ghost")
    assert ei.value.profile_id == "ghost"
    with pytest.raises(MissingChartData):
        chart_from_record({"nakshatra": 4, "pada": 1}, profile_id="p-9")
