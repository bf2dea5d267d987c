"""
Contract tests for the formula API.

Tests verify the wire contract of the formula endpoints:
- Response body schemas (single camelCase key, string value)
- Two-decimal text format, including trailing zeros
- Non-finite results rendered as "NaN" / "Infinity"
- Query parameters published in the OpenAPI schema

Responses are validated against the contract models below.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from api.src.main import app


# ============================================================================
# CONTRACT MODELS (API Contract Definitions)
# ============================================================================

RESULT_PATTERN = r"^(-?\d+\.\d{2}|NaN|-?Infinity)$"


class StrictBody(BaseModel):
    """Response bodies carry exactly one key."""

    model_config = ConfigDict(extra="forbid", strict=True)


class BmiBody(StrictBody):
    bmi: str = Field(..., pattern=RESULT_PATTERN)


class BodyFatBody(StrictBody):
    bodyFat: str = Field(..., pattern=RESULT_PATTERN)


class IdealWeightBody(StrictBody):
    idealWeight: str = Field(..., pattern=RESULT_PATTERN)


class CaloriesBurnedBody(StrictBody):
    caloriesBurned: str = Field(..., pattern=RESULT_PATTERN)


ENDPOINTS = {
    "/bmi": (BmiBody, {"weight": "70", "height": "175"}),
    "/bodyfat": (BodyFatBody, {"height": "180", "neck": "38", "waist": "85", "hips": "95"}),
    "/idealweight": (IdealWeightBody, {"height": "180"}),
    "/caloriesburned": (CaloriesBurnedBody, {"weight": "80", "duration": "30", "met": "5"}),
}


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# CONTRACT MODEL SELF-CHECKS
# ============================================================================


class TestContractModels:
    """The contract models accept and reject what the wire format says."""

    @pytest.mark.parametrize("value", ["22.86", "200.00", "-450.00", "0.00", "NaN", "Infinity", "-Infinity"])
    def test_accepts_result_text(self, value):
        assert BmiBody(bmi=value).bmi == value

    @pytest.mark.parametrize("value", ["22.857", "200", "22.9", "nan", "inf"])
    def test_rejects_other_formats(self, value):
        with pytest.raises(ValidationError):
            BmiBody(bmi=value)

    def test_rejects_numbers(self):
        with pytest.raises(ValidationError):
            BmiBody(bmi=22.86)

    def test_rejects_extra_keys(self):
        with pytest.raises(ValidationError):
            BmiBody(bmi="22.86", unit="kg/m2")


# ============================================================================
# CONTRACT VALIDATION TESTS
# ============================================================================


class TestResponseContract:
    """Live responses satisfy the contract models."""

    @pytest.mark.parametrize("path", sorted(ENDPOINTS))
    def test_valid_request(self, client, path):
        model, params = ENDPOINTS[path]

        response = client.get(path, params=params)

        assert response.status_code == 200
        model.model_validate(response.json())

    @pytest.mark.parametrize("path", sorted(ENDPOINTS))
    def test_missing_parameters(self, client, path):
        model, _ = ENDPOINTS[path]

        response = client.get(path)

        assert response.status_code == 200
        body = model.model_validate(response.json())
        assert list(body.model_dump().values()) == ["NaN"]

    def test_integer_result_keeps_trailing_zeros(self, client):
        response = client.get("/caloriesburned", params={"weight": 60, "duration": 60, "met": 1})

        assert response.json()["caloriesBurned"] == "60.00"

    def test_result_is_a_json_string(self, client):
        response = client.get("/idealweight?height=180")

        assert response.text.replace(" ", "") == '{"idealWeight":"74.84"}'


class TestOpenApiContract:
    """The OpenAPI schema documents every formula route."""

    @pytest.fixture(scope="class")
    def schema(self, client):
        return client.get("/openapi.json").json()

    @pytest.mark.parametrize("path", sorted(ENDPOINTS))
    def test_route_is_get_only(self, schema, path):
        assert set(schema["paths"][path]) == {"get"}

    @pytest.mark.parametrize("path", sorted(ENDPOINTS))
    def test_query_parameters(self, schema, path):
        _, params = ENDPOINTS[path]
        operation = schema["paths"][path]["get"]

        documented = {p["name"] for p in operation["parameters"] if p["in"] == "query"}
        assert documented == set(params)
