import logging

from fastapi.testclient import TestClient

from isofit.core.config import reset_settings
from isofit.main import app


client = TestClient(app)


def _calculate(**payload):
    return client.post("/api/v1/tolerance/calculate", json=payload)


def test_calculate_fit_h7_g6():
    resp = _calculate(nominal_size_mm=40, mode="FIT", grade1="H7", grade2="g6")
    assert resp.status_code == 200
    data = resp.json()
    assert data["mode"] == "FIT"
    assert data["hole"]["grade"] == "H7"
    assert data["hole"]["upper_deviation_um"] == 25
    assert data["hole"]["lower_deviation_um"] == 0
    assert data["shaft"]["upper_deviation_um"] == -9
    assert data["shaft"]["lower_deviation_um"] == -25
    assert data["fit"]["fit_type"] == "Clearance"
    assert data["fit"]["max_clearance_um"] == 50
    assert data["fit"]["min_clearance_um"] == 9
    assert data["recommendation_key"] == "pair.g"
    assert data["iso_standard"] == "ISO 286-1:2010"
    assert data["text_summary"].startswith("Nominal Size: 40 mm")


def test_calculate_fit_h7_p6_is_interference():
    resp = _calculate(nominal_size_mm=40, grade1="H7", grade2="p6")
    assert resp.status_code == 200
    fit = resp.json()["fit"]
    assert fit["fit_type"] == "Interference"
    assert fit["max_interference"] == 42
    assert fit["min_interference"] == 1


def test_calculate_single_mode():
    resp = _calculate(nominal_size_mm=40, mode="SINGLE", grade1="g6")
    assert resp.status_code == 200
    data = resp.json()
    assert data["hole"] is None
    assert data["fit"] is None
    assert data["shaft"]["grade"] == "g6"
    assert data["recommendation_key"] == "default"


def test_calculate_german_output():
    resp = _calculate(nominal_size_mm=40, grade1="H7", grade2="k6", language="de")
    assert resp.status_code == 200
    data = resp.json()
    assert data["language"] == "de"
    assert data["fit"]["fit_type"] == "Transition"
    assert data["fit"]["fit_type_name"] == "Übergangspassung"


def test_default_language_from_settings(monkeypatch):
    monkeypatch.setenv("DEFAULT_LANGUAGE", "de")
    reset_settings()
    resp = _calculate(nominal_size_mm=40, grade1="H7", grade2="g6")
    assert resp.json()["language"] == "de"


def test_out_of_range_error_payload():
    resp = _calculate(nominal_size_mm=600, grade1="7H", grade2="g6")
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "OUT_OF_RANGE"
    assert detail["field"] == "nominal_size"
    assert detail["value"] == 600
    assert "600" in detail["message"]


def test_error_codes_map_to_distinct_messages():
    cases = [
        ({"grade1": "7H", "grade2": "g6"}, "INVALID_FORMAT"),
        ({"grade1": "Z7", "grade2": "g6"}, "UNSUPPORTED_LETTER"),
        ({"grade1": "H12", "grade2": "g6"}, "UNSUPPORTED_GRADE"),
        ({"grade1": "H7"}, "MISSING_GRADE"),
    ]
    messages = set()
    for payload, code in cases:
        resp = _calculate(nominal_size_mm=40, **payload)
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["code"] == code
        messages.add(detail["message"])
    assert len(messages) == len(cases)


def test_error_message_is_localized():
    resp = _calculate(nominal_size_mm=40, grade1="H7", language="de")
    assert resp.status_code == 400
    assert "Welle" in resp.json()["detail"]["message"]


def test_log_records_language_used_for_response(caplog):
    caplog.set_level(logging.INFO, logger="isofit.api.v1.tolerance")

    resp = _calculate(nominal_size_mm=40, grade1="H7", grade2="g6", language="de-DE")
    assert resp.json()["language"] == "de"
    resp = _calculate(nominal_size_mm=40, grade1="H7", language="fr")
    assert resp.status_code == 400

    records = [r for r in caplog.records if r.name == "isofit.api.v1.tolerance"]
    assert [r.language for r in records] == ["de", "en"]


def test_request_validation():
    resp = client.post("/api/v1/tolerance/calculate", json={"nominal_size_mm": 40})
    assert resp.status_code == 422


def test_vocabulary():
    resp = client.get("/api/v1/tolerance/vocabulary")
    assert resp.status_code == 200
    data = resp.json()
    assert data["it_grades"] == ["5", "6", "7", "8", "9", "10", "11"]
    assert data["hole_letters"] == ["H", "F", "G", "N", "P"]
    assert data["shaft_letters"] == ["d", "e", "f", "g", "h", "k", "m", "n", "p", "r", "s"]
    assert data["modes"] == ["SINGLE", "FIT"]
    assert data["max_nominal_size_mm"] == 500.0
    assert "de" in data["languages"]


def test_preferred_fits():
    resp = client.get("/api/v1/tolerance/preferred-fits")
    assert resp.status_code == 200
    assert len(resp.json()) == 9

    resp = client.get("/api/v1/tolerance/preferred-fits", params={"fit_type": "Interference"})
    assert [fit["code"] for fit in resp.json()] == ["H7/p6", "H7/s6"]


def test_advisor():
    resp = client.get(
        "/api/v1/tolerance/advisor",
        params={"movement": "Fixed", "condition": "permanent", "system": "shaft"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["code"] == "P7/h6"
    assert data["hole_basis_code"] == "H7/p6"
    assert data["fit_type"] == "Interference"
    assert data["explanation"]


def test_advisor_german():
    resp = client.get(
        "/api/v1/tolerance/advisor",
        params={"movement": "moving", "condition": "running", "language": "de-DE"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["language"] == "de"
    assert data["fit_type_name"] == "Spielpassung"


def test_advisor_invalid_choice():
    resp = client.get(
        "/api/v1/tolerance/advisor",
        params={"movement": "moving", "condition": "permanent"},
    )
    assert resp.status_code == 400


def test_api_key_enforced_when_configured(monkeypatch):
    monkeypatch.setenv("API_KEY", "secret")
    reset_settings()

    resp = client.get("/api/v1/tolerance/vocabulary")
    assert resp.status_code == 401

    resp = client.get("/api/v1/tolerance/vocabulary", headers={"X-API-Key": "wrong"})
    assert resp.status_code == 403

    resp = client.get("/api/v1/tolerance/vocabulary", headers={"X-API-Key": "secret"})
    assert resp.status_code == 200


def test_root_and_health():
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["standard"] == "ISO 286-1:2010"

    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["config"]["api_key_required"] is False


def test_metrics_exposed():
    _calculate(nominal_size_mm=40, grade1="H7", grade2="g6")
    _calculate(nominal_size_mm=600, grade1="H7", grade2="g6")

    resp = client.get("/metrics/")
    assert resp.status_code == 200
    body = resp.text
    assert "tolerance_calculations_total" in body
    assert 'tolerance_errors_total{code="OUT_OF_RANGE"}' in body
