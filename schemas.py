from __future__ import annotations
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from jyotish_core.attributes import Gana, Nadi, Nakshatra, Planet, Rashi, Varna, VashyaGroup, Yoni, parse_enum
from jyotish_core.chart import BirthChart


# --------- Common ---------
class ErrorDetail(BaseModel):
    field: Optional[str] = None
    issue: Optional[str] = None


class ErrorEnvelope(BaseModel):
    code: str = Field(default="SERVER_ERROR")
    message: str
    details: Optional[List[ErrorDetail]] = None


class ErrorResponse(BaseModel):
    error: ErrorEnvelope


# --------- Inputs ---------
_ENUM_FIELDS = {
    "nakshatra": Nakshatra,
    "rashi": Rashi,
    "gana": Gana,
    "yoni": Yoni,
    "varna": Varna,
    "nadi": Nadi,
    "vashyaGroup": VashyaGroup,
    "rulingPlanet": Planet,
}


class BirthChartIn(BaseModel):
    """Resolved Moon-chart attributes of one person."""
    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {
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
        ]
    })

    nakshatra: Nakshatra = Field(..., description="Lunar mansion, ordinal 1-27 or name.", examples=[5])
    rashi: Rashi = Field(..., description="Moon sign, ordinal 1-12 or name.", examples=[2])
    gana: Gana = Field(..., description="Deva, Manushya or Rakshasa.", examples=["Deva"])
    yoni: Yoni = Field(..., description="One of the 14 yoni animals.", examples=["Horse"])
    varna: Varna = Field(..., description="Brahmin, Kshatriya, Vaishya or Shudra.", examples=["Kshatriya"])
    nadi: Nadi = Field(..., description="Adi, Madhya or Antya.", examples=["Adi"])
    vashyaGroup: VashyaGroup = Field(..., description="Vashya (Keeta), Chatushpada, Manava, Jalachara or Vanachara.", examples=["Manava"])
    rulingPlanet: Planet = Field(..., description="Lord of the Moon sign.", examples=["Mars"])
    isManglik: bool = Field(..., description="Whether the person is Manglik.", examples=[False])

    @field_validator(*_ENUM_FIELDS, mode="before")
    @classmethod
    def _closed_set(cls, v: Any, info) -> Any:
        return parse_enum(_ENUM_FIELDS[info.field_name], v)

    def to_chart(self) -> BirthChart:
        return BirthChart(
            nakshatra=self.nakshatra,
            rashi=self.rashi,
            gana=self.gana,
            yoni=self.yoni,
            varna=self.varna,
            nadi=self.nadi,
            vashya_group=self.vashyaGroup,
            ruling_planet=self.rulingPlanet,
            is_manglik=self.isManglik,
        )


class ChartPairIn(BaseModel):
    """Groom (chartA) and bride (chartB) charts."""
    chartA: BirthChartIn
    chartB: BirthChartIn
    strictTradition: Optional[bool] = Field(default=None, description="Also treat the 2/12 Bhakoot distance as inauspicious. Defaults to server setting.")


class ProfilePairIn(BaseModel):
    """Two stored profile ids, groom first."""
    profileIdA: str = Field(..., examples=["p-101"])
    profileIdB: str = Field(..., examples=["p-202"])
    strictTradition: Optional[bool] = None

    @field_validator("profileIdA", "profileIdB", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# --------- Outputs ---------
class KootaOut(BaseModel):
    name: str
    score: float
    maxScore: int
    rationale: str
    meaning: str


class DoshaWarningOut(BaseModel):
    type: str
    present: bool
    severity: str
    note: str


class CompatibilityReportOut(BaseModel):
    kootas: List[KootaOut]
    totalScore: float
    maxScore: int = 36
    tier: str
    doshaWarnings: List[DoshaWarningOut] = Field(default_factory=list)
    percentage: int
    recommendation: str
    canMatch: bool


class AshtakootaData(BaseModel):
    """Vedic Ashtakoota report plus its plain-text explanation."""
    report: CompatibilityReportOut
    explanation: str


class AshtakootaOut(BaseModel):
    data: AshtakootaData


class CatalogEntry(BaseModel):
    id: int
    name: str


class CatalogOut(BaseModel):
    data: List[CatalogEntry]
