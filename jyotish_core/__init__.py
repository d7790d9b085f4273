"""jyotish_core
================================================================================
Closed astrological attribute sets, the BirthChart record and the error
taxonomy shared by the Guna Milan services.
"""
from __future__ import annotations

from .attributes import (
    Gana,
    Nadi,
    Nakshatra,
    Planet,
    Rashi,
    Varna,
    VashyaGroup,
    Yoni,
)
from .chart import BirthChart, chart_from_record, derive_chart
from .errors import GunaMilanError, InvalidAttribute, MissingChartData, SelfComparison

__all__ = [
    "BirthChart",
    "Gana",
    "GunaMilanError",
    "InvalidAttribute",
    "MissingChartData",
    "Nadi",
    "Nakshatra",
    "Planet",
    "Rashi",
    "SelfComparison",
    "Varna",
    "VashyaGroup",
    "Yoni",
    "chart_from_record",
    "derive_chart",
]
