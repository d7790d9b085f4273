from __future__ import annotations
from functools import lru_cache
from typing import Optional, Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Body

from schemas import (
    ChartPairIn,
    ProfilePairIn,
    AshtakootaOut, AshtakootaData, CompatibilityReportOut,
    CatalogOut, CatalogEntry,
)

from jyotish_core.attributes import nakshatra_catalog, rashi_catalog
from reporting.explain import explain_report
from services.ashtakoota_services import AshtakootaScorer, CompatibilityReport
from services.profile_store import InMemoryProfileStore, load_profile_store
from settings import PROFILE_STORE_PATH, STRICT_TRADITION


def _require_api_headers(
    x_correlation_id: Annotated[Optional[str], Header(alias="X-Correlation-ID")] = None,
    x_transaction_id: Annotated[Optional[str], Header(alias="X-Transaction-ID")] = None,
    x_session_id: Annotated[Optional[str], Header(alias="X-Session-ID")] = None,
    x_app_id: Annotated[Optional[str], Header(alias="X-App-ID")] = None,
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
) -> None:
    if not authorization or not str(authorization).strip():
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    missing = []
    if not x_correlation_id:
        missing.append("X-Correlation-ID")
    if not x_transaction_id:
        missing.append("X-Transaction-ID")
    if not x_session_id:
        missing.append("X-Session-ID")
    if not x_app_id:
        missing.append("X-App-ID")

    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required headers: {', '.join(missing)}")


router = APIRouter(prefix="/api", dependencies=[Depends(_require_api_headers)])


# --------------------- Dependencies ---------------------

@lru_cache()
def get_profile_store() -> InMemoryProfileStore:
    """Profile store configured by PROFILE_STORE_PATH, loaded once per process."""
    return load_profile_store(PROFILE_STORE_PATH)


def _scorer(store: Optional[InMemoryProfileStore], strict_tradition: Optional[bool]) -> AshtakootaScorer:
    strict = STRICT_TRADITION if strict_tradition is None else strict_tradition
    return AshtakootaScorer(store, strict_tradition=strict)


def _out(report: CompatibilityReport) -> AshtakootaOut:
    return AshtakootaOut(
        data=AshtakootaData(
            report=CompatibilityReportOut(**report.to_dict()),
            explanation=explain_report(report),
        )
    )


# --------------- Vedic Compatibility (Ashtakoota / Gun Milan) ---------------
@router.post(
    "/compat/ashtakoota",
    response_model=AshtakootaOut,
    tags=["Compatibility"],
    summary="Vedic Ashtakoota (Gun Milan) score for two resolved charts",
)
def compat_ashtakoota(
    req: ChartPairIn = Body(
        ...,
        openapi_examples={
            "sample": {
                "summary": "Sample",
                "value": {
                    "chartA": {
                        "nakshatra": 5, "rashi": 2, "gana": "Deva", "yoni": "Horse", "varna": "Kshatriya",
                        "nadi": "Adi", "vashyaGroup": "Manava", "rulingPlanet": "Mars", "isManglik": False
                    },
                    "chartB": {
                        "nakshatra": 14, "rashi": 9, "gana": "Manushya", "yoni": "Horse", "varna": "Vaishya",
                        "nadi": "Madhya", "vashyaGroup": "Manava", "rulingPlanet": "Jupiter", "isManglik": False
                    },
                },
            }
        },
    ),
) -> AshtakootaOut:
    """Score groom (chartA) against bride (chartB) and return the 8-koota breakdown plus a short explanation.

    strictTradition (optional) also treats the 2/12 Bhakoot distance as inauspicious.
    """
    report = _scorer(None, req.strictTradition).score_charts(req.chartA.to_chart(), req.chartB.to_chart())
    return _out(report)


@router.post(
    "/compat/ashtakoota/profiles",
    response_model=AshtakootaOut,
    tags=["Compatibility"],
    summary="Vedic Ashtakoota (Gun Milan) score for two stored profiles",
)
def compat_ashtakoota_profiles(
    req: ProfilePairIn,
    store: InMemoryProfileStore = Depends(get_profile_store),
) -> AshtakootaOut:
    report = _scorer(store, req.strictTradition).score(req.profileIdA, req.profileIdB)
    return _out(report)


@router.get(
    "/compat/ashtakoota/match/{profile_id}",
    response_model=AshtakootaOut,
    tags=["Compatibility"],
    summary="Horoscope match of the caller's own profile with another profile",
)
def compat_ashtakoota_match(
    profile_id: str,
    x_profile_id: Annotated[Optional[str], Header(alias="X-Profile-ID")] = None,
    strict_tradition: Optional[bool] = None,
    store: InMemoryProfileStore = Depends(get_profile_store),
) -> AshtakootaOut:
    """The caller's profile (X-Profile-ID) is scored as chart A, the path profile as chart B."""
    if not x_profile_id or not x_profile_id.strip():
        raise HTTPException(status_code=400, detail="Missing required headers: X-Profile-ID")
    report = _scorer(store, strict_tradition).score_for_viewer(x_profile_id, profile_id)
    return _out(report)


# --------------- Reference data -----------------
@router.get("/ref/nakshatras", response_model=CatalogOut, tags=["Reference"], summary="List the 27 nakshatras")
def list_nakshatras() -> CatalogOut:
    return CatalogOut(data=[CatalogEntry(**row) for row in nakshatra_catalog()])


@router.get("/ref/rashis", response_model=CatalogOut, tags=["Reference"], summary="List the 12 rashis")
def list_rashis() -> CatalogOut:
    return CatalogOut(data=[CatalogEntry(**row) for row in rashi_catalog()])
