import logging

import pytest
from fastapi.testclient import TestClient

from api_router import get_profile_store
from main import app
from tests.conftest import API_HEADERS, BRIDE, GROOM

client = TestClient(app)


@pytest.fixture(autouse=True)
def _override_store(store):
    app.dependency_overrides[get_profile_store] = lambda: store
    yield
    app.dependency_overrides.clear()


def test_ashtakoota_charts_smoke():
    r = client.post("/api/compat/ashtakoota", json={"chartA": GROOM, "chartB": BRIDE}, headers=API_HEADERS)
    assert r.status_code == 200, f"Unexpected {r.status_code}: {r.text}"
    data = r.json()["data"]
    report = data["report"]
    assert [k["name"] for k in report["kootas"]] == [
        "Varna", "Vashya", "Tara", "Yoni", "GrahaMaitri", "Gana", "Bhakoot", "Nadi",
    ]
    assert report["totalScore"] == 26.5
    assert report["maxScore"] == 36
    assert report["tier"] == "Good"
    assert report["doshaWarnings"] == []
    assert report["canMatch"] is True
    assert "Total: 26.5/36" in data["explanation"]


def test_ashtakoota_strict_tradition_flag():
    a = dict(GROOM, rashi=1)
    b = dict(BRIDE, rashi=12)
    loose = client.post("/api/compat/ashtakoota", json={"chartA": a, "chartB": b}, headers=API_HEADERS).json()
    strict = client.post(
        "/api/compat/ashtakoota", json={"chartA": a, "chartB": b, "strictTradition": True}, headers=API_HEADERS
    ).json()
    assert loose["data"]["report"]["kootas"][6]["score"] == 7
    assert strict["data"]["report"]["kootas"][6]["score"] == 0


def test_ashtakoota_rejects_out_of_set_values():
    r = client.post("/api/compat/ashtakoota", json={"chartA": dict(GROOM, gana="Asura"), "chartB": BRIDE}, headers=API_HEADERS)
    assert r.status_code == 422
    body = r.json()
    assert body["error"]["code"] == "UNPROCESSABLE_ENTITY"
    assert any("gana" in (d["field"] or "") for d in body["error"]["details"])


def test_profiles_endpoint_and_manglik_warning():
    r = client.post("/api/compat/ashtakoota/profiles", json={"profileIdA": "p-101", "profileIdB": "p-303"}, headers=API_HEADERS)
    assert r.status_code == 200, r.text
    warnings = r.json()["data"]["report"]["doshaWarnings"]
    assert warnings == [
        {
            "type": "Manglik",
            "present": True,
            "severity": "Full",
            "note": "Bride is Manglik while the partner is not; remedies may be needed",
        }
    ]


@pytest.mark.parametrize(
    "a, b, status, code",
    [
        ("p-101", "p-101", 400, "SELF_COMPARISON"),
        ("p-101", "ghost", 404, "MISSING_CHART_DATA"),
        ("p-101", "p-404", 404, "MISSING_CHART_DATA"),
        ("p-101", "p-505", 500, "INVALID_ATTRIBUTE"),
    ],
)
def test_profiles_endpoint_errors(a, b, status, code):
    r = client.post("/api/compat/ashtakoota/profiles", json={"profileIdA": a, "profileIdB": b}, headers=API_HEADERS)
    assert r.status_code == status
    assert r.json()["error"]["code"] == code


def test_viewer_match():
    r = client.get("/api/compat/ashtakoota/match/p-202", headers=dict(API_HEADERS, **{"X-Profile-ID": "p-101"}))
    assert r.status_code == 200, r.text
    assert r.json()["data"]["report"]["totalScore"] == 26.5

    r = client.get("/api/compat/ashtakoota/match/p-202", headers=dict(API_HEADERS, **{"X-Profile-ID": "nobody"}))
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Your profile not found"

    r = client.get("/api/compat/ashtakoota/match/p-202", headers=API_HEADERS)
    assert r.status_code == 400


def test_reference_catalogs():
    naks = client.get("/api/ref/nakshatras", headers=API_HEADERS).json()["data"]
    assert len(naks) == 27
    assert naks[13] == {"id": 14, "name": "Chitra"}
    rashis = client.get("/api/ref/rashis", headers=API_HEADERS).json()["data"]
    assert [r["id"] for r in rashis] == list(range(1, 13))


def test_missing_auth_and_headers():
    r = client.get("/api/ref/rashis")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"
    r = client.get("/api/ref/rashis", headers={"Authorization": "Bearer test-token"})
    assert r.status_code == 400
    assert "X-Correlation-ID" in r.json()["error"]["message"]


def test_health_endpoints():
    assert client.get("/healthz").json()["ok"] is True
    ready = client.get("/readyz").json()
    assert ready["ready"] is True


def test_request_id_echo_and_correlation_fallback():
    r = client.get("/api/ref/rashis", headers=dict(API_HEADERS, **{"X-Request-ID": "rid-42"}))
    assert r.headers["X-Request-ID"] == "rid-42"
    r = client.get("/api/ref/rashis", headers=API_HEADERS)
    assert r.headers["X-Request-ID"] == API_HEADERS["X-Correlation-ID"]
    assert client.get("/healthz").headers["X-Request-ID"]


def test_http_errors_use_envelope_codes():
    r = client.get("/api/no-such-route", headers=API_HEADERS)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"
    r = client.get("/api/compat/ashtakoota", headers=API_HEADERS)
    assert r.status_code == 405
    assert r.json()["error"]["code"] == "METHOD_NOT_ALLOWED"
    assert "POST" in r.headers.get("allow", "")


def test_access_log_level_follows_status(caplog):
    caplog.set_level(logging.INFO, logger="middleware")
    client.get("/api/ref/rashis", headers=dict(API_HEADERS, **{"X-Request-ID": "rid-ok"}))
    client.get("/api/ref/rashis", headers={"X-Request-ID": "rid-denied"})
    lines = {r.getMessage(): r.levelno for r in caplog.records if r.name == "middleware"}
    ok = next(m for m in lines if "rid=rid-ok" in m)
    denied = next(m for m in lines if "rid=rid-denied" in m)
    assert ok.startswith("GET /api/ref/rashis => 200")
    assert lines[ok] == logging.INFO
    assert "=> 401" in denied
    assert lines[denied] == logging.WARNING
