"""koota_services
================================================================================
The eight Ashtakoota rules. Each rule is a pure function
``(chart_a, chart_b) -> KootaResult`` where chart_a is conventionally the groom
and chart_b the bride.

Design principles
-----------------
- Static, read-only tables indexed by the closed enums; symmetric tables are
  built from their upper triangle and mirrored, then checked for exhaustiveness
  at import time.
- Directional classical rules (Varna, the Gana Rakshasa/Deva exception) are
  explicit branches, never table entries.
- Every result carries a rationale naming the attributes and the class used.

Public API
----------
- score_varna, score_vashya, score_tara, score_yoni, score_graha_maitri,
  score_gana, score_bhakoot, score_nadi
- koota_rules(strict_tradition=False) -> tuple of the eight rules in report order
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import partial
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Sequence, Tuple, TypeVar

from jyotish_core.attributes import Gana, Planet, VashyaGroup, Yoni
from jyotish_core.chart import BirthChart

K = TypeVar("K")
V = TypeVar("V")


# =============================== Types ===============================

class Koota(Enum):
    VARNA = ("Varna", 1, "Spiritual & mental balance, mutual respect, non-dominance")
    VASHYA = ("Vashya", 2, "Control, dominance, mutual influence")
    TARA = ("Tara", 3, "Health, longevity, general wellbeing")
    YONI = ("Yoni", 4, "Physical attraction & intimacy")
    GRAHA_MAITRI = ("GrahaMaitri", 5, "Friendship, mental connection, intellectual sync")
    GANA = ("Gana", 6, "Nature, temperament, and behavioral compatibility")
    BHAKOOT = ("Bhakoot", 7, "Emotional harmony, family welfare and prosperity")
    NADI = ("Nadi", 8, "Health of progeny, fertility, life energy")

    def __init__(self, label: str, max_score: int, meaning: str):
        self.label = label
        self.max_score = max_score
        self.meaning = meaning


TOTAL_MAX_SCORE = sum(k.max_score for k in Koota)


@dataclass(frozen=True)
class KootaResult:
    koota: Koota
    score: float
    rationale: str

    def __post_init__(self) -> None:
        if not 0 <= self.score <= self.koota.max_score:
            raise ValueError(f"{self.koota.label} score {self.score} outside 0..{self.koota.max_score}")

    @property
    def name(self) -> str:
        return self.koota.label

    @property
    def max_score(self) -> int:
        return self.koota.max_score

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "rationale": self.rationale,
            "meaning": self.koota.meaning,
        }


KootaRule = Callable[[BirthChart, BirthChart], KootaResult]


class YoniRelation(Enum):
    SAME = ("Same", 4)
    FRIEND = ("Friend", 3)
    NEUTRAL = ("Neutral", 2)
    ENEMY = ("Enemy", 1)
    BITTER_ENEMY = ("Bitter Enemy", 0)

    def __init__(self, label: str, points: int):
        self.label = label
        self.points = points


class PlanetRelation(Enum):
    BEST = ("Best", 5)
    FRIEND = ("Friend", 4)
    NEUTRAL = ("Neutral", 3)
    ENEMY = ("Enemy", 1)
    BITTER_ENEMY = ("Bitter Enemy", 0)

    def __init__(self, label: str, points: int):
        self.label = label
        self.points = points


# =============================== Table builders ===============================

def _mirror(members: Sequence[K], upper: Sequence[Sequence[V]]) -> Mapping[Tuple[K, K], V]:
    """Expand upper-triangle rows (row i holds columns i..n-1) into a full square table."""
    n = len(members)
    if len(upper) != n or any(len(row) != n - i for i, row in enumerate(upper)):
        raise AssertionError("upper triangle does not match member count")
    table: Dict[Tuple[K, K], V] = {}
    for i, row in enumerate(upper):
        for offset, value in enumerate(row):
            j = i + offset
            table[(members[i], members[j])] = value
            table[(members[j], members[i])] = value
    return MappingProxyType(table)


def _assert_square(table: Mapping[Tuple[K, K], V], members: Iterable[K], label: str) -> None:
    members = list(members)
    missing = [(a, b) for a in members for b in members if (a, b) not in table]
    if missing:
        raise AssertionError(f"{label} is missing {len(missing)} combinations, e.g. {missing[0]}")


# =============================== Tables ===============================

# Vashya: 2 same group, 1 friendly groups, 0 otherwise.
_VASHYA_ORDER = (
    VashyaGroup.VASHYA,
    VashyaGroup.CHATUSHPADA,
    VashyaGroup.MANAVA,
    VashyaGroup.JALACHARA,
    VashyaGroup.VANACHARA,
)
VASHYA_TABLE: Mapping[Tuple[VashyaGroup, VashyaGroup], int] = _mirror(_VASHYA_ORDER, (
    #  Vashya Chatu Manava Jala Vana
    (2,      0,    0,     1,   0),   # Vashya (Keeta)
    (2,      1,    0,     1),        # Chatushpada
    (2,      1,    0),               # Manava
    (2,      0),                     # Jalachara
    (2,),                            # Vanachara
))

# Yoni: classical 14x14 animal compatibility.
_YONI_ORDER = (
    Yoni.HORSE, Yoni.ELEPHANT, Yoni.SHEEP, Yoni.SERPENT, Yoni.DOG, Yoni.CAT, Yoni.RAT,
    Yoni.COW, Yoni.BUFFALO, Yoni.TIGER, Yoni.DEER, Yoni.MONKEY, Yoni.MONGOOSE, Yoni.LION,
)
_YONI_POINTS = _mirror(_YONI_ORDER, (
    # Hor Ele She Ser Dog Cat Rat Cow Buf Tig Dee Mon Mgs Lio
    (4,  2,  2,  3,  2,  2,  2,  1,  0,  1,  3,  3,  2,  1),  # Horse
    (4,  3,  3,  2,  2,  2,  2,  3,  1,  2,  3,  2,  0),      # Elephant
    (4,  2,  1,  2,  1,  3,  3,  1,  2,  0,  3,  1),          # Sheep
    (4,  2,  1,  1,  1,  1,  2,  2,  2,  0,  2),              # Serpent
    (4,  2,  1,  2,  2,  1,  0,  2,  1,  1),                  # Dog
    (4,  0,  2,  2,  1,  3,  3,  2,  1),                      # Cat
    (4,  2,  2,  2,  2,  2,  1,  2),                          # Rat
    (4,  3,  0,  3,  2,  2,  1),                              # Cow
    (4,  1,  2,  2,  2,  1),                                  # Buffalo
    (4,  1,  1,  2,  1),                                      # Tiger
    (4,  2,  2,  1),                                          # Deer
    (4,  3,  2),                                              # Monkey
    (4,  2),                                                  # Mongoose
    (4,),                                                     # Lion
))
_YONI_BY_POINTS = {r.points: r for r in YoniRelation}
YONI_TABLE: Mapping[Tuple[Yoni, Yoni], YoniRelation] = MappingProxyType(
    {pair: _YONI_BY_POINTS[p] for pair, p in _YONI_POINTS.items()}
)

# Natural (naisargika) friendships. Anything in neither set is neutral.
NATURAL_RELATIONS: Mapping[Planet, Tuple[FrozenSet[Planet], FrozenSet[Planet]]] = MappingProxyType({
    Planet.SUN: (frozenset({Planet.MOON, Planet.MARS, Planet.JUPITER}),
                 frozenset({Planet.VENUS, Planet.SATURN})),
    Planet.MOON: (frozenset({Planet.SUN, Planet.MERCURY}),
                  frozenset({Planet.RAHU, Planet.KETU})),
    Planet.MARS: (frozenset({Planet.SUN, Planet.MOON, Planet.JUPITER}),
                  frozenset({Planet.MERCURY})),
    Planet.MERCURY: (frozenset({Planet.SUN, Planet.VENUS}),
                     frozenset({Planet.MOON})),
    Planet.JUPITER: (frozenset({Planet.SUN, Planet.MOON, Planet.MARS}),
                     frozenset({Planet.MERCURY, Planet.VENUS})),
    Planet.VENUS: (frozenset({Planet.MERCURY, Planet.SATURN}),
                   frozenset({Planet.SUN, Planet.MOON})),
    Planet.SATURN: (frozenset({Planet.MERCURY, Planet.VENUS}),
                    frozenset({Planet.SUN, Planet.MOON, Planet.MARS})),
    Planet.RAHU: (frozenset({Planet.MERCURY, Planet.VENUS, Planet.SATURN}),
                  frozenset({Planet.SUN, Planet.MOON, Planet.MARS})),
    Planet.KETU: (frozenset({Planet.MARS, Planet.VENUS, Planet.MERCURY}),
                  frozenset({Planet.SUN, Planet.MOON})),
})


def _view(of: Planet, towards: Planet) -> int:
    friends, enemies = NATURAL_RELATIONS[of]
    if towards in friends:
        return 1
    if towards in enemies:
        return -1
    return 0


def _mutual_relation(a: Planet, b: Planet) -> PlanetRelation:
    if a is b:
        return PlanetRelation.BEST
    views = sorted((_view(a, b), _view(b, a)))
    if views == [1, 1]:
        return PlanetRelation.BEST
    if views == [0, 1]:
        return PlanetRelation.FRIEND
    if views == [0, 0]:
        return PlanetRelation.NEUTRAL
    if views == [-1, -1]:
        return PlanetRelation.BITTER_ENEMY
    return PlanetRelation.ENEMY


_PLANET_ORDER = tuple(Planet)
GRAHA_MAITRI_TABLE: Mapping[Tuple[Planet, Planet], PlanetRelation] = _mirror(
    _PLANET_ORDER,
    [[_mutual_relation(a, b) for b in _PLANET_ORDER[i:]] for i, a in enumerate(_PLANET_ORDER)],
)

# Gana base matrix; the Rakshasa-groom/Deva-bride exception lives in score_gana.
_GANA_ORDER = (Gana.DEVA, Gana.MANUSHYA, Gana.RAKSHASA)
GANA_TABLE: Mapping[Tuple[Gana, Gana], int] = _mirror(_GANA_ORDER, (
    (6, 5, 0),  # Deva
    (6, 1),     # Manushya
    (6,),       # Rakshasa
))

# Tara per direction, indexed by d mod 9 (0 is the 9th tara).
TARA_NAMES = (
    "Parama Mitra", "Janma", "Sampat", "Vipat", "Kshema", "Pratyari", "Sadhaka", "Vadha", "Mitra",
)
TARA_POINTS: Tuple[float, ...] = (3.0, 1.5, 3.0, 0.0, 3.0, 0.0, 3.0, 0.0, 3.0)
TARA_ALLOWED: Tuple[float, ...] = (0.0, 1.5, 3.0)

# Bhakoot distance classes: 6/8, 5/9 (and 2/12 under strict tradition).
BHAKOOT_INAUSPICIOUS: FrozenSet[int] = frozenset({5, 6, 8, 9})
BHAKOOT_INAUSPICIOUS_STRICT: FrozenSet[int] = BHAKOOT_INAUSPICIOUS | {2, 12}

_assert_square(VASHYA_TABLE, VashyaGroup, "VASHYA_TABLE")
_assert_square(YONI_TABLE, Yoni, "YONI_TABLE")
_assert_square(GRAHA_MAITRI_TABLE, Planet, "GRAHA_MAITRI_TABLE")
_assert_square(GANA_TABLE, Gana, "GANA_TABLE")
if not len(TARA_POINTS) == len(TARA_NAMES) == 9:
    raise AssertionError("Tara tables need one entry per d mod 9")
if not set(TARA_POINTS) <= set(TARA_ALLOWED):
    raise AssertionError("TARA_POINTS holds a value outside TARA_ALLOWED")


# ============================ Koota scorers =============================

def score_varna(a: BirthChart, b: BirthChart) -> KootaResult:
    """Varna (out of 1): groom's varna must not be lower than the bride's."""
    ok = a.varna.rank >= b.varna.rank
    relation = "not lower than" if ok else "lower than"
    return KootaResult(
        Koota.VARNA,
        1 if ok else 0,
        f"Groom varna {a.varna.value} is {relation} bride varna {b.varna.value}",
    )


def score_vashya(a: BirthChart, b: BirthChart) -> KootaResult:
    points = VASHYA_TABLE[(a.vashya_group, b.vashya_group)]
    cls = {2: "same group", 1: "friendly groups", 0: "unrelated groups"}[points]
    return KootaResult(
        Koota.VASHYA,
        points,
        f"Vashya {a.vashya_group.value} vs {b.vashya_group.value}: {cls}",
    )


def _tara_direction(from_nak: int, to_nak: int) -> Tuple[int, float]:
    d = ((to_nak - from_nak) % 27) + 1
    return d % 9, TARA_POINTS[d % 9]


def _nearest_allowed(value: float) -> float:
    # ties go to the lower value
    return min(TARA_ALLOWED, key=lambda allowed: (abs(allowed - value), allowed))


def score_tara(a: BirthChart, b: BirthChart) -> KootaResult:
    """Tara (out of 3): average of both directions' tara, snapped to {0, 1.5, 3}."""
    idx_ab, pts_ab = _tara_direction(a.nakshatra.value, b.nakshatra.value)
    idx_ba, pts_ba = _tara_direction(b.nakshatra.value, a.nakshatra.value)
    awarded = _nearest_allowed((pts_ab + pts_ba) / 2.0)
    return KootaResult(
        Koota.TARA,
        awarded,
        f"Tara {a.nakshatra.display_name}->{b.nakshatra.display_name} is {TARA_NAMES[idx_ab]} ({pts_ab:g}), "
        f"{b.nakshatra.display_name}->{a.nakshatra.display_name} is {TARA_NAMES[idx_ba]} ({pts_ba:g})",
    )


def score_yoni(a: BirthChart, b: BirthChart) -> KootaResult:
    relation = YONI_TABLE[(a.yoni, b.yoni)]
    return KootaResult(
        Koota.YONI,
        relation.points,
        f"Yoni {a.yoni.value} vs {b.yoni.value}: {relation.label}",
    )


def score_graha_maitri(a: BirthChart, b: BirthChart) -> KootaResult:
    relation = GRAHA_MAITRI_TABLE[(a.ruling_planet, b.ruling_planet)]
    return KootaResult(
        Koota.GRAHA_MAITRI,
        relation.points,
        f"Moon sign lords {a.ruling_planet.value} vs {b.ruling_planet.value}: {relation.label}",
    )


def score_gana(a: BirthChart, b: BirthChart) -> KootaResult:
    """Gana (out of 6) from the base matrix, with the classical groom-Rakshasa/bride-Deva exception."""
    if a.gana is Gana.RAKSHASA and b.gana is Gana.DEVA:
        return KootaResult(
            Koota.GANA,
            1,
            "Gana Rakshasa (groom) vs Deva (bride): exception lifts 0 to 1",
        )
    points = GANA_TABLE[(a.gana, b.gana)]
    return KootaResult(Koota.GANA, points, f"Gana {a.gana.value} vs {b.gana.value}")


def score_bhakoot(a: BirthChart, b: BirthChart, *, strict_tradition: bool = False) -> KootaResult:
    """Bhakoot (out of 7) from the rashi distance class."""
    d = ((b.rashi.value - a.rashi.value) % 12) + 1
    bad = BHAKOOT_INAUSPICIOUS_STRICT if strict_tradition else BHAKOOT_INAUSPICIOUS
    inauspicious = d in bad
    status = "inauspicious" if inauspicious else "auspicious"
    return KootaResult(
        Koota.BHAKOOT,
        0 if inauspicious else 7,
        f"Rashi {a.rashi.display_name}->{b.rashi.display_name} distance {d}: {status}",
    )


def score_nadi(a: BirthChart, b: BirthChart) -> KootaResult:
    same = a.nadi is b.nadi
    detail = "same nadi (Nadi dosha)" if same else "different nadi"
    return KootaResult(Koota.NADI, 0 if same else 8, f"Nadi {a.nadi.value} vs {b.nadi.value}: {detail}")


def koota_rules(strict_tradition: bool = False) -> Tuple[KootaRule, ...]:
    """The eight rules in report order (Varna .. Nadi)."""
    return (
        score_varna,
        score_vashya,
        score_tara,
        score_yoni,
        score_graha_maitri,
        score_gana,
        partial(score_bhakoot, strict_tradition=strict_tradition),
        score_nadi,
    )
