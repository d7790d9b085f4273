"""BirthChart record: strict parsing from profile data and classical derivation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from .attributes import (
    NAKSHATRA_GANA,
    NAKSHATRA_NADI,
    NAKSHATRA_YONI,
    RASHI_LORD,
    RASHI_VARNA,
    RASHI_VASHYA,
    Gana,
    Nadi,
    Nakshatra,
    Planet,
    Rashi,
    Varna,
    VashyaGroup,
    Yoni,
    parse_enum,
    rashi_for,
    rashis_of,
)
from .errors import InvalidAttribute, MissingChartData

# (attribute, camelCase key, snake_case key, enum)
CHART_FIELDS: Tuple[Tuple[str, str, str, Type[Enum]], ...] = (
    ("nakshatra", "nakshatra", "nakshatra", Nakshatra),
    ("rashi", "rashi", "rashi", Rashi),
    ("gana", "gana", "gana", Gana),
    ("yoni", "yoni", "yoni", Yoni),
    ("varna", "varna", "varna", Varna),
    ("nadi", "nadi", "nadi", Nadi),
    ("vashya_group", "vashyaGroup", "vashya_group", VashyaGroup),
    ("ruling_planet", "rulingPlanet", "ruling_planet", Planet),
)
MANGLIK_KEYS = ("isManglik", "is_manglik", "manglik")


@dataclass(frozen=True)
class BirthChart:
    """Resolved attributes of one person's Moon chart.

    Produced by a resolver (profile store, derivation helper) and consumed
    read-only by the Koota rules. Construction rejects any attribute that is
    not a member of its closed set.
    """

    nakshatra: Nakshatra
    rashi: Rashi
    gana: Gana
    yoni: Yoni
    varna: Varna
    nadi: Nadi
    vashya_group: VashyaGroup
    ruling_planet: Planet
    is_manglik: bool

    def __post_init__(self) -> None:
        for attr, key, _, enum_cls in CHART_FIELDS:
            value = getattr(self, attr)
            if not isinstance(value, enum_cls):
                raise InvalidAttribute(
                    f"{key} must be a {enum_cls.__name__}, got {value!r}", field=key, value=value
                )
        if not isinstance(self.is_manglik, bool):
            raise InvalidAttribute(
                f"isManglik must be a boolean, got {self.is_manglik!r}", field="isManglik", value=self.is_manglik
            )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "BirthChart":
        """Parse a fully populated chart mapping (camelCase or snake_case keys).

        Raises MissingChartData when the mapping or any field is absent and
        InvalidAttribute when a value lies outside its closed set.
        """
        if data is None:
            raise MissingChartData("Chart data is missing")
        missing = missing_fields(data)
        if missing:
            raise MissingChartData(f"Chart is missing fields: {', '.join(missing)}", field=missing[0])
        values: Dict[str, Any] = {}
        for attr, key, snake, enum_cls in CHART_FIELDS:
            raw = _get(data, key, snake)
            values[attr] = _parse(enum_cls, raw, key)
        values["is_manglik"] = _parse_bool(_get(data, *MANGLIK_KEYS), "isManglik")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nakshatra": {"id": self.nakshatra.value, "name": self.nakshatra.display_name},
            "rashi": {"id": self.rashi.value, "name": self.rashi.display_name},
            "gana": self.gana.value,
            "yoni": self.yoni.value,
            "varna": self.varna.value,
            "nadi": self.nadi.value,
            "vashyaGroup": self.vashya_group.value,
            "rulingPlanet": self.ruling_planet.value,
            "isManglik": self.is_manglik,
        }


def _get(data: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in data and data[k] is not None:
            return data[k]
    return None


def _parse(enum_cls: Type[Enum], raw: Any, key: str) -> Any:
    try:
        return parse_enum(enum_cls, raw)
    except ValueError as exc:
        raise InvalidAttribute(str(exc), field=key, value=raw) from None


def _parse_bool(raw: Any, key: str) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in {"true", "yes", "1"}:
        return True
    if isinstance(raw, str) and raw.strip().lower() in {"false", "no", "0"}:
        return False
    raise InvalidAttribute(f"{key} must be a boolean, got {raw!r}", field=key, value=raw)


def missing_fields(data: Mapping[str, Any]) -> List[str]:
    missing = [key for _, key, snake, _ in CHART_FIELDS if _get(data, key, snake) is None]
    if _get(data, *MANGLIK_KEYS) is None:
        missing.append("isManglik")
    return missing


def derive_chart(
    nakshatra: Any,
    is_manglik: bool,
    *,
    pada: Optional[int] = None,
    rashi: Any = None,
) -> BirthChart:
    """Build a full chart from the Moon's nakshatra plus its pada or rashi.

    Gana, yoni and nadi follow the nakshatra; varna, vashya group and ruling
    planet follow the rashi. When both pada and rashi are given they must agree.
    """
    nak = _parse(Nakshatra, nakshatra, "nakshatra")
    if pada is not None:
        try:
            from_pada = rashi_for(nak, int(pada))
        except (TypeError, ValueError) as exc:
            raise InvalidAttribute(str(exc), field="pada", value=pada) from None
        if rashi is not None and _parse(Rashi, rashi, "rashi") is not from_pada:
            raise InvalidAttribute(
                f"rashi {rashi!r} does not hold pada {pada} of {nak.display_name}", field="rashi", value=rashi
            )
        ras = from_pada
    elif rashi is not None:
        ras = _parse(Rashi, rashi, "rashi")
        if ras not in rashis_of(nak):
            raise InvalidAttribute(
                f"{nak.display_name} does not fall in {ras.display_name}", field="rashi", value=rashi
            )
    else:
        raise MissingChartData("Either pada or rashi is required to derive a chart", field="rashi")
    return BirthChart(
        nakshatra=nak,
        rashi=ras,
        gana=NAKSHATRA_GANA[nak],
        yoni=NAKSHATRA_YONI[nak],
        varna=RASHI_VARNA[ras],
        nadi=NAKSHATRA_NADI[nak],
        vashya_group=RASHI_VASHYA[ras],
        ruling_planet=RASHI_LORD[ras],
        is_manglik=_parse_bool(is_manglik, "isManglik"),
    )


def chart_from_record(record: Optional[Mapping[str, Any]], *, profile_id: Optional[str] = None) -> BirthChart:
    """Resolve a profile-store record into a BirthChart.

    A record either carries every chart attribute, or only the seed
    (nakshatra, pada or rashi, isManglik) from which the rest is derived.
    """
    if record is None:
        raise MissingChartData(f"Profile {profile_id} not found", profile_id=profile_id)
    missing = missing_fields(record)
    if not missing:
        return BirthChart.from_mapping(record)
    seed_ready = (
        record.get("nakshatra") is not None
        and (record.get("pada") is not None or record.get("rashi") is not None)
        and _get(record, *MANGLIK_KEYS) is not None
    )
    if not seed_ready:
        raise MissingChartData(
            f"Profile {profile_id} is missing chart fields: {', '.join(missing)}",
            profile_id=profile_id,
            field=missing[0],
        )
    return derive_chart(
        record["nakshatra"],
        _get(record, *MANGLIK_KEYS),
        pada=record.get("pada"),
        rashi=record.get("rashi"),
    )
