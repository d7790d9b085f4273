"""attributes
================================================================================
Closed attribute sets of a Vedic birth chart and the classical tables that
derive the secondary attributes from the Moon's nakshatra and rashi.

Public API
----------
- Nakshatra (1..27), Rashi (1..12): IntEnum, value is the ordinal.
- Gana, Yoni, Varna, Nadi, VashyaGroup, Planet: str Enum, value is the display name.
- parse_enum(enum_cls, raw) -> member
- rashi_for(nakshatra, pada) -> Rashi
- rashis_of(nakshatra) -> tuple of the rashis a nakshatra's padas fall in
- nakshatra_catalog(), rashi_catalog() -> [{"id", "name"}]

Notes
-----
Where traditions disagree (vashya group of Sagittarius/Capricorn, which are
split mid-sign in some texts), the whole sign takes the group of its first
half. Every table is a read-only mapping checked for completeness at import.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Type, TypeVar

E = TypeVar("E", bound=Enum)


# =============================== Enums ===============================

class Nakshatra(IntEnum):
    ASHWINI = 1
    BHARANI = 2
    KRITTIKA = 3
    ROHINI = 4
    MRIGASHIRA = 5
    ARDRA = 6
    PUNARVASU = 7
    PUSHYA = 8
    ASHLESHA = 9
    MAGHA = 10
    PURVA_PHALGUNI = 11
    UTTARA_PHALGUNI = 12
    HASTA = 13
    CHITRA = 14
    SWATI = 15
    VISHAKHA = 16
    ANURADHA = 17
    JYESHTHA = 18
    MULA = 19
    PURVA_ASHADHA = 20
    UTTARA_ASHADHA = 21
    SHRAVANA = 22
    DHANISHTA = 23
    SHATABHISHA = 24
    PURVA_BHADRAPADA = 25
    UTTARA_BHADRAPADA = 26
    REVATI = 27

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


class Rashi(IntEnum):
    ARIES = 1
    TAURUS = 2
    GEMINI = 3
    CANCER = 4
    LEO = 5
    VIRGO = 6
    LIBRA = 7
    SCORPIO = 8
    SAGITTARIUS = 9
    CAPRICORN = 10
    AQUARIUS = 11
    PISCES = 12

    @property
    def display_name(self) -> str:
        return self.name.title()


class Gana(str, Enum):
    DEVA = "Deva"
    MANUSHYA = "Manushya"
    RAKSHASA = "Rakshasa"


class Yoni(str, Enum):
    HORSE = "Horse"
    ELEPHANT = "Elephant"
    SHEEP = "Sheep"
    SERPENT = "Serpent"
    DOG = "Dog"
    CAT = "Cat"
    RAT = "Rat"
    COW = "Cow"
    BUFFALO = "Buffalo"
    TIGER = "Tiger"
    DEER = "Deer"
    MONKEY = "Monkey"
    MONGOOSE = "Mongoose"
    LION = "Lion"


class Varna(str, Enum):
    BRAHMIN = "Brahmin"
    KSHATRIYA = "Kshatriya"
    VAISHYA = "Vaishya"
    SHUDRA = "Shudra"

    @property
    def rank(self) -> int:
        """Brahmin(4) > Kshatriya(3) > Vaishya(2) > Shudra(1)."""
        return VARNA_RANK[self]


class Nadi(str, Enum):
    ADI = "Adi"
    MADHYA = "Madhya"
    ANTYA = "Antya"


class VashyaGroup(str, Enum):
    # VASHYA is the insect group (Scorpio), classically called Keeta.
    VASHYA = "Vashya"
    CHATUSHPADA = "Chatushpada"
    MANAVA = "Manava"
    JALACHARA = "Jalachara"
    VANACHARA = "Vanachara"


class Planet(str, Enum):
    SUN = "Sun"
    MOON = "Moon"
    MARS = "Mars"
    MERCURY = "Mercury"
    JUPITER = "Jupiter"
    VENUS = "Venus"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"


VARNA_RANK: Mapping[Varna, int] = MappingProxyType({
    Varna.BRAHMIN: 4,
    Varna.KSHATRIYA: 3,
    Varna.VAISHYA: 2,
    Varna.SHUDRA: 1,
})


# =============================== Parsing ===============================

# Spellings seen in profile data that name an existing member.
_ALIASES: Dict[Type[Enum], Dict[str, str]] = {
    Nakshatra: {"MOOLA": "MULA", "ASWINI": "ASHWINI", "DHANISHTHA": "DHANISHTA", "SHATATARAKA": "SHATABHISHA"},
    Rashi: {
        "MESHA": "ARIES", "VRISHABHA": "TAURUS", "MITHUNA": "GEMINI", "KARKA": "CANCER",
        "SIMHA": "LEO", "KANYA": "VIRGO", "TULA": "LIBRA", "VRISCHIKA": "SCORPIO",
        "DHANU": "SAGITTARIUS", "MAKARA": "CAPRICORN", "KUMBHA": "AQUARIUS", "MEENA": "PISCES",
    },
    Gana: {"DEVATA": "DEVA", "MANUSHA": "MANUSHYA"},
    Yoni: {"GOAT": "SHEEP", "GAJA": "ELEPHANT", "HARE": "DEER", "SNAKE": "SERPENT"},
    Nadi: {"AADI": "ADI", "ADYA": "ADI", "VATA": "ADI", "PITTA": "MADHYA", "KAPHA": "ANTYA"},
    VashyaGroup: {"KEETA": "VASHYA", "MANAV": "MANAVA", "INSECT": "VASHYA",
                  "QUADRUPED": "CHATUSHPADA", "HUMAN": "MANAVA", "WATER": "JALACHARA", "WILD": "VANACHARA"},
    Planet: {"SURYA": "SUN", "CHANDRA": "MOON", "MANGAL": "MARS", "BUDH": "MERCURY",
             "GURU": "JUPITER", "SHUKRA": "VENUS", "SHANI": "SATURN"},
}


def _normalize_token(raw: str) -> str:
    return "_".join(raw.strip().replace("-", " ").replace("_", " ").split()).upper()


def parse_enum(enum_cls: Type[E], raw: Any) -> E:
    """Resolve ``raw`` to a member of ``enum_cls``.

    Accepts a member, the member name or display value in any case/spacing,
    a known alias, or (for Nakshatra/Rashi) the ordinal as int or digit string.
    Raises ValueError when the value lies outside the closed set.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, bool) or raw is None:
        raise ValueError(f"{raw!r} is not a valid {enum_cls.__name__}")
    if issubclass(enum_cls, IntEnum):
        if isinstance(raw, int) or (isinstance(raw, str) and raw.strip().isdigit()):
            try:
                return enum_cls(int(raw))
            except ValueError:
                raise ValueError(f"{raw!r} is not a valid {enum_cls.__name__} ordinal") from None
    if isinstance(raw, str) and raw.strip():
        token = _normalize_token(raw)
        token = _ALIASES.get(enum_cls, {}).get(token, token)
        if token in enum_cls.__members__:
            return enum_cls.__members__[token]
    raise ValueError(f"{raw!r} is not a valid {enum_cls.__name__}")


# =============================== Derivation tables ===============================

NAKSHATRA_GANA: Mapping[Nakshatra, Gana] = MappingProxyType({
    Nakshatra.ASHWINI: Gana.DEVA,
    Nakshatra.BHARANI: Gana.MANUSHYA,
    Nakshatra.KRITTIKA: Gana.RAKSHASA,
    Nakshatra.ROHINI: Gana.MANUSHYA,
    Nakshatra.MRIGASHIRA: Gana.DEVA,
    Nakshatra.ARDRA: Gana.MANUSHYA,
    Nakshatra.PUNARVASU: Gana.DEVA,
    Nakshatra.PUSHYA: Gana.DEVA,
    Nakshatra.ASHLESHA: Gana.RAKSHASA,
    Nakshatra.MAGHA: Gana.RAKSHASA,
    Nakshatra.PURVA_PHALGUNI: Gana.MANUSHYA,
    Nakshatra.UTTARA_PHALGUNI: Gana.MANUSHYA,
    Nakshatra.HASTA: Gana.DEVA,
    Nakshatra.CHITRA: Gana.RAKSHASA,
    Nakshatra.SWATI: Gana.DEVA,
    Nakshatra.VISHAKHA: Gana.RAKSHASA,
    Nakshatra.ANURADHA: Gana.DEVA,
    Nakshatra.JYESHTHA: Gana.RAKSHASA,
    Nakshatra.MULA: Gana.RAKSHASA,
    Nakshatra.PURVA_ASHADHA: Gana.MANUSHYA,
    Nakshatra.UTTARA_ASHADHA: Gana.MANUSHYA,
    Nakshatra.SHRAVANA: Gana.DEVA,
    Nakshatra.DHANISHTA: Gana.RAKSHASA,
    Nakshatra.SHATABHISHA: Gana.RAKSHASA,
    Nakshatra.PURVA_BHADRAPADA: Gana.MANUSHYA,
    Nakshatra.UTTARA_BHADRAPADA: Gana.MANUSHYA,
    Nakshatra.REVATI: Gana.DEVA,
})

NAKSHATRA_NADI: Mapping[Nakshatra, Nadi] = MappingProxyType({
    Nakshatra.ASHWINI: Nadi.ADI,
    Nakshatra.BHARANI: Nadi.MADHYA,
    Nakshatra.KRITTIKA: Nadi.ANTYA,
    Nakshatra.ROHINI: Nadi.ANTYA,
    Nakshatra.MRIGASHIRA: Nadi.MADHYA,
    Nakshatra.ARDRA: Nadi.ADI,
    Nakshatra.PUNARVASU: Nadi.ADI,
    Nakshatra.PUSHYA: Nadi.MADHYA,
    Nakshatra.ASHLESHA: Nadi.ANTYA,
    Nakshatra.MAGHA: Nadi.ANTYA,
    Nakshatra.PURVA_PHALGUNI: Nadi.MADHYA,
    Nakshatra.UTTARA_PHALGUNI: Nadi.ADI,
    Nakshatra.HASTA: Nadi.ADI,
    Nakshatra.CHITRA: Nadi.MADHYA,
    Nakshatra.SWATI: Nadi.ANTYA,
    Nakshatra.VISHAKHA: Nadi.ANTYA,
    Nakshatra.ANURADHA: Nadi.MADHYA,
    Nakshatra.JYESHTHA: Nadi.ADI,
    Nakshatra.MULA: Nadi.ADI,
    Nakshatra.PURVA_ASHADHA: Nadi.MADHYA,
    Nakshatra.UTTARA_ASHADHA: Nadi.ANTYA,
    Nakshatra.SHRAVANA: Nadi.ANTYA,
    Nakshatra.DHANISHTA: Nadi.MADHYA,
    Nakshatra.SHATABHISHA: Nadi.ADI,
    Nakshatra.PURVA_BHADRAPADA: Nadi.ADI,
    Nakshatra.UTTARA_BHADRAPADA: Nadi.MADHYA,
    Nakshatra.REVATI: Nadi.ANTYA,
})

NAKSHATRA_YONI: Mapping[Nakshatra, Yoni] = MappingProxyType({
    Nakshatra.ASHWINI: Yoni.HORSE,
    Nakshatra.BHARANI: Yoni.ELEPHANT,
    Nakshatra.KRITTIKA: Yoni.SHEEP,
    Nakshatra.ROHINI: Yoni.SERPENT,
    Nakshatra.MRIGASHIRA: Yoni.SERPENT,
    Nakshatra.ARDRA: Yoni.DOG,
    Nakshatra.PUNARVASU: Yoni.CAT,
    Nakshatra.PUSHYA: Yoni.SHEEP,
    Nakshatra.ASHLESHA: Yoni.CAT,
    Nakshatra.MAGHA: Yoni.RAT,
    Nakshatra.PURVA_PHALGUNI: Yoni.RAT,
    Nakshatra.UTTARA_PHALGUNI: Yoni.COW,
    Nakshatra.HASTA: Yoni.BUFFALO,
    Nakshatra.CHITRA: Yoni.TIGER,
    Nakshatra.SWATI: Yoni.BUFFALO,
    Nakshatra.VISHAKHA: Yoni.TIGER,
    Nakshatra.ANURADHA: Yoni.DEER,
    Nakshatra.JYESHTHA: Yoni.DEER,
    Nakshatra.MULA: Yoni.DOG,
    Nakshatra.PURVA_ASHADHA: Yoni.MONKEY,
    Nakshatra.UTTARA_ASHADHA: Yoni.MONGOOSE,
    Nakshatra.SHRAVANA: Yoni.MONKEY,
    Nakshatra.DHANISHTA: Yoni.LION,
    Nakshatra.SHATABHISHA: Yoni.HORSE,
    Nakshatra.PURVA_BHADRAPADA: Yoni.LION,
    Nakshatra.UTTARA_BHADRAPADA: Yoni.COW,
    Nakshatra.REVATI: Yoni.ELEPHANT,
})

# Water -> Brahmin, Fire -> Kshatriya, Earth -> Vaishya, Air -> Shudra
RASHI_VARNA: Mapping[Rashi, Varna] = MappingProxyType({
    Rashi.ARIES: Varna.KSHATRIYA,
    Rashi.TAURUS: Varna.VAISHYA,
    Rashi.GEMINI: Varna.SHUDRA,
    Rashi.CANCER: Varna.BRAHMIN,
    Rashi.LEO: Varna.KSHATRIYA,
    Rashi.VIRGO: Varna.VAISHYA,
    Rashi.LIBRA: Varna.SHUDRA,
    Rashi.SCORPIO: Varna.BRAHMIN,
    Rashi.SAGITTARIUS: Varna.KSHATRIYA,
    Rashi.CAPRICORN: Varna.VAISHYA,
    Rashi.AQUARIUS: Varna.SHUDRA,
    Rashi.PISCES: Varna.BRAHMIN,
})

RASHI_VASHYA: Mapping[Rashi, VashyaGroup] = MappingProxyType({
    Rashi.ARIES: VashyaGroup.CHATUSHPADA,
    Rashi.TAURUS: VashyaGroup.CHATUSHPADA,
    Rashi.GEMINI: VashyaGroup.MANAVA,
    Rashi.CANCER: VashyaGroup.JALACHARA,
    Rashi.LEO: VashyaGroup.VANACHARA,
    Rashi.VIRGO: VashyaGroup.MANAVA,
    Rashi.LIBRA: VashyaGroup.MANAVA,
    Rashi.SCORPIO: VashyaGroup.VASHYA,
    Rashi.SAGITTARIUS: VashyaGroup.MANAVA,
    Rashi.CAPRICORN: VashyaGroup.CHATUSHPADA,
    Rashi.AQUARIUS: VashyaGroup.MANAVA,
    Rashi.PISCES: VashyaGroup.JALACHARA,
})

RASHI_LORD: Mapping[Rashi, Planet] = MappingProxyType({
    Rashi.ARIES: Planet.MARS,
    Rashi.TAURUS: Planet.VENUS,
    Rashi.GEMINI: Planet.MERCURY,
    Rashi.CANCER: Planet.MOON,
    Rashi.LEO: Planet.SUN,
    Rashi.VIRGO: Planet.MERCURY,
    Rashi.LIBRA: Planet.VENUS,
    Rashi.SCORPIO: Planet.MARS,
    Rashi.SAGITTARIUS: Planet.JUPITER,
    Rashi.CAPRICORN: Planet.SATURN,
    Rashi.AQUARIUS: Planet.SATURN,
    Rashi.PISCES: Planet.JUPITER,
})

PADAS_PER_NAKSHATRA = 4
PADAS_PER_RASHI = 9


def rashi_for(nakshatra: Nakshatra, pada: int) -> Rashi:
    """Rashi holding the given pada (1..4) of a nakshatra.

    The 108 padas are laid end to end; each rashi spans exactly nine.
    """
    if not 1 <= int(pada) <= PADAS_PER_NAKSHATRA:
        raise ValueError(f"pada must be within 1..4, got {pada!r}")
    index = (int(nakshatra) - 1) * PADAS_PER_NAKSHATRA + (int(pada) - 1)
    return Rashi(index // PADAS_PER_RASHI + 1)


def rashis_of(nakshatra: Nakshatra) -> Tuple[Rashi, ...]:
    seen: List[Rashi] = []
    for pada in range(1, PADAS_PER_NAKSHATRA + 1):
        r = rashi_for(nakshatra, pada)
        if r not in seen:
            seen.append(r)
    return tuple(seen)


def nakshatra_catalog() -> List[Dict[str, Any]]:
    return [{"id": n.value, "name": n.display_name} for n in Nakshatra]


def rashi_catalog() -> List[Dict[str, Any]]:
    return [{"id": r.value, "name": r.display_name} for r in Rashi]


def _assert_complete(table: Mapping[Any, Any], keys: Type[Enum], label: str) -> None:
    missing = [k for k in keys if k not in table]
    if missing:
        raise AssertionError(f"{label} table is missing entries for {missing}")


_assert_complete(NAKSHATRA_GANA, Nakshatra, "NAKSHATRA_GANA")
_assert_complete(NAKSHATRA_NADI, Nakshatra, "NAKSHATRA_NADI")
_assert_complete(NAKSHATRA_YONI, Nakshatra, "NAKSHATRA_YONI")
_assert_complete(RASHI_VARNA, Rashi, "RASHI_VARNA")
_assert_complete(RASHI_VASHYA, Rashi, "RASHI_VASHYA")
_assert_complete(RASHI_LORD, Rashi, "RASHI_LORD")
_assert_complete(VARNA_RANK, Varna, "VARNA_RANK")
