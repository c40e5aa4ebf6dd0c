from __future__ import annotations

from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings
from contracts import InternalConsistencyError


def _client() -> TestClient:
    return TestClient(create_app(Settings(log_level="WARNING")))


def test_evaluate_arithmetic_expression():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "2 + 3 * 4"})

    assert response.status_code == 200
    body = response.json()
    assert body["value"] == 14.0
    assert body["display_value"] == "14"
    assert body["is_boolean_expression"] is False
    assert body["postfix_notation"] == "2 3 4 * +"
    assert body["expression"] == "2 + 3 * 4"


def test_evaluate_is_also_served_under_api_prefix():
    with _client() as client:
        response = client.post(
            "/api/evaluate",
            json={"expression": "x^2 + y", "variables": {"x": 5, "y": 3}},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["value"] == 28.0
    assert body["variables"] == {"x": 5.0, "y": 3.0}
    assert body["has_numeric_variables"] is True


def test_evaluate_boolean_expression_display_value():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "5 > 3 and 2 < 4"})

    assert response.json()["display_value"] == "true"
    assert response.json()["is_boolean_expression"] is True


def test_evaluate_syntax_error_is_400_with_kind():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "2 3"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "SyntaxError"
    assert "Missing operator" in body["message"]
    assert body["expression"] == "2 3"
    assert body["status_code"] == 400


def test_evaluate_division_by_zero_is_distinct_error():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "5 / 0"})

    assert response.status_code == 400
    assert response.json()["error"] == "DivisionByZeroError"


def test_evaluate_missing_variables_are_listed():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "x + y + 5"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "MissingVariableError"
    assert body["missing"] == ["x", "y"]


def test_evaluate_rejects_malformed_body():
    with _client() as client:
        missing = client.post("/evaluate", json={})
        empty = client.post("/evaluate", json={"expression": ""})
        not_numeric = client.post(
            "/evaluate", json={"expression": "x", "variables": {"x": "abc"}}
        )

    for response in (missing, empty, not_numeric):
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"


def test_extract_variables():
    with _client() as client:
        response = client.post("/extract-variables", json={"expression": "a + b * c"})

    assert response.status_code == 200
    assert response.json() == {
        "variables": ["a", "b", "c"],
        "expression": "a + b * c",
        "has_variables": True,
    }


def test_extract_variables_reports_syntax_error():
    with _client() as client:
        response = client.post("/api/extract-variables", json={"expression": "a +"})

    assert response.status_code == 400
    assert response.json()["error"] == "SyntaxError"


def test_health_reports_engine_status():
    with _client() as client:
        response = client.get("/health")
        prefixed = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["checks"] == {"engine": "ok"}
    assert prefixed.status_code == 200


class _BrokenEngine:
    def evaluate(self, expression, variables=None):
        raise InternalConsistencyError("operand stack underflow")

    def extract_variables(self, expression):
        raise InternalConsistencyError("operand stack underflow")


def test_health_is_503_when_engine_fails():
    with _client() as client:
        client.app.state.engine = _BrokenEngine()
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["checks"] == {"engine": "failed"}


def test_internal_consistency_error_is_500():
    with _client() as client:
        client.app.state.engine = _BrokenEngine()
        response = client.post("/evaluate", json={"expression": "1 + 1"})

    assert response.status_code == 500
    assert response.json()["error"] == "InternalConsistencyError"


def test_non_finite_result_is_reported_as_null_value():
    with _client() as client:
        response = client.post("/evaluate", json={"expression": "10 ^ 400"})

    assert response.status_code == 200
    assert response.json()["value"] is None
    assert response.json()["display_value"] == "inf"
