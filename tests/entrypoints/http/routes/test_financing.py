"""
Test suite for the /v1/financing routes.

Verifies the HTTP endpoint behavior:
- Route accepts the request payload and validates it
- Route delegates to use cases via dependency injection
- Route uses the mapper to convert between DTOs and domain models
- Route returns decimal strings and structured validation errors
"""

from __future__ import annotations

import logging
from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from drivewise.domain.financing import AncillaryMonthly, LoanCostBreakdown
from drivewise.domain.profile import CreditScoreTier
from drivewise.domain.errors import InternalError
from drivewise.entrypoints.http.dependencies import (
    get_calculate_loan_cost_use_case,
    get_compare_lease_vs_buy_use_case,
)
from drivewise.entrypoints.http.exception_handlers import register_exception_handlers
from drivewise.entrypoints.http.routes.financing import router


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with financing router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_use_case() -> Mock:
    return Mock()


@pytest.fixture
def sample_breakdown() -> LoanCostBreakdown:
    return LoanCostBreakdown(
        vehicle_price=Decimal("20000.00"),
        price_known=True,
        down_payment=Decimal("4000.00"),
        loan_amount=Decimal("16000.00"),
        annual_interest_rate=Decimal("0.065"),
        term_months=60,
        monthly_loan_payment=Decimal("313.05"),
        ancillary_monthly=AncillaryMonthly(
            insurance=Decimal("150"), gas=Decimal("100"), maintenance=Decimal("75")
        ),
        total_monthly_cost=Decimal("638.05"),
        total_interest_over_term=Decimal("2783.00"),
        total_cost_over_term=Decimal("42283.00"),
    )


# ==============================================================================
# POST /v1/financing/breakdown - with mocked use case
# ==============================================================================


def test_breakdown_success(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_breakdown: LoanCostBreakdown
) -> None:
    mock_use_case.execute.return_value = sample_breakdown
    app.dependency_overrides[get_calculate_loan_cost_use_case] = lambda: mock_use_case

    response = client.post(
        "/v1/financing/breakdown",
        json={"price": "20000", "credit_score_tier": "good", "fuel_economy": "51/53 mpg"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["vehicle_price"] == "20000.00"
    assert data["monthly_loan_payment"] == "313.05"
    assert data["ancillary_monthly"]["gas"] == "100"
    assert data["budget_impact"] is None
    assert data["schedule"] == []

    req = mock_use_case.execute.call_args.args[0]
    assert req.vehicle_price == Decimal("20000")
    assert req.fuel_economy_city_mpg == Decimal("51")
    assert req.profile.credit_score_tier is CreditScoreTier.GOOD


def test_breakdown_missing_price_does_not_call_use_case(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    app.dependency_overrides[get_calculate_loan_cost_use_case] = lambda: mock_use_case

    response = client.post("/v1/financing/breakdown", json={"annual_income": "60000"})

    assert response.status_code == 422
    assert response.json() == {
        "detail": "Validation failed",
        "code": "VALIDATION_ERROR",
        "errors": [
            {"field": "price", "message": "Provide price or price_text", "code": "MISSING_PRICE"}
        ],
    }
    mock_use_case.execute.assert_not_called()


# ==============================================================================
# POST /v1/financing/breakdown - real use case
# ==============================================================================


def test_breakdown_reference_vehicle(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/breakdown",
        json={"price": "30000.00", "annual_income": "60000", "credit_score_tier": "excellent"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["down_payment"] == "6000.00"
    assert data["loan_amount"] == "24000.00"
    assert data["annual_interest_rate"] == "0.045"
    assert data["term_months"] == 60
    assert data["monthly_loan_payment"] == "447.43"
    assert data["total_monthly_cost"] == "822.43"
    assert data["total_interest_over_term"] == "2845.80"
    assert data["total_cost_over_term"] == "55345.80"
    assert data["budget_impact"] == {
        "percent_of_monthly_income": "16.45",
        "within_guideline": True,
        "status": "caution",
    }


def test_breakdown_from_price_label(client: TestClient) -> None:
    response = client.post("/v1/financing/breakdown", json={"price_text": "$26,420 - $28,500"})

    assert response.status_code == 200
    data = response.json()
    assert data["vehicle_price"] == "27460.00"
    assert data["price_known"] is True
    assert data["annual_interest_rate"] == "0.065"


def test_breakdown_unknown_price(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/breakdown",
        json={"price_text": "Call for price", "annual_income": "60000"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["price_known"] is False
    assert data["monthly_loan_payment"] == "0.00"
    assert data["budget_impact"] is None


def test_breakdown_with_schedule(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/breakdown",
        json={"price": "30000", "credit_score_tier": "excellent", "schedule_months": 2},
    )

    schedule = response.json()["schedule"]
    assert [row["period"] for row in schedule] == [1, 2]
    assert schedule[0]["opening_balance"] == "24000.00"
    assert schedule[0]["interest_component"] == "90.00"


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"price": "30,000"}, "price"),
        ({"price": "-1"}, "price"),
        ({"price": "1" + "0" * 27}, "price"),
        ({"price": "1" + "0" * 15}, "price"),
        ({"price": "30000", "schedule_months": 73}, "schedule_months"),
        ({"price": "30000", "schedule_months": -1}, "schedule_months"),
    ],
)
def test_breakdown_rejects_invalid_payload(client: TestClient, payload: dict, field: str) -> None:
    response = client.post("/v1/financing/breakdown", json=payload)

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == field


def test_breakdown_accepts_largest_price(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/breakdown",
        json={"price": "999999999999999.99", "annual_income": "1" + "0" * 32},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["vehicle_price"] == "999999999999999.99"
    assert data["budget_impact"] is not None


def test_breakdown_missing_price_with_info_logging(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="drivewise")

    response = client.post("/v1/financing/breakdown", json={"annual_income": "60000"})

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "MISSING_PRICE"
    assert any(record.getMessage() == "Client error" for record in caplog.records)


# ==============================================================================
# POST /v1/financing/terms
# ==============================================================================


def test_terms_comparison(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/terms", json={"price": "30000", "credit_score_tier": "excellent"}
    )

    assert response.status_code == 200
    options = response.json()["options"]
    assert [option["term_months"] for option in options] == [36, 48, 60, 72]
    assert options[2]["monthly_payment"] == "447.43"
    assert {option["down_payment"] for option in options} == {"6000.00"}


def test_terms_custom_down_payment_share(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/terms", json={"price": "30000", "down_payment_share": "0.5"}
    )

    assert response.status_code == 200
    assert response.json()["options"][0]["loan_amount"] == "15000.00"


@pytest.mark.parametrize("share", ["1.5", "-0.1", "abc"])
def test_terms_rejects_invalid_share(client: TestClient, share: str) -> None:
    response = client.post(
        "/v1/financing/terms", json={"price": "30000", "down_payment_share": share}
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "down_payment_share"


# ==============================================================================
# POST /v1/financing/lease-options
# ==============================================================================


def test_lease_options(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/lease-options", json={"price": "30000", "credit_score_tier": "good"}
    )

    assert response.status_code == 200
    options = {option["term_months"]: option for option in response.json()["options"]}
    assert sorted(options) == [24, 36, 48]
    assert options[36]["residual_value"] == "16500.00"
    assert options[36]["money_factor"] == "0.00271"
    assert options[36]["monthly_payment"] == "500.94"
    assert options[36]["upfront_costs"] == "1250.94"


def test_lease_options_requires_price(client: TestClient) -> None:
    response = client.post("/v1/financing/lease-options", json={"credit_score_tier": "good"})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "price"


def test_lease_options_mileage_analysis(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/lease-options",
        json={"price": "30000", "estimated_miles_per_year": 15000},
    )

    assert response.status_code == 200
    options = {option["term_months"]: option for option in response.json()["options"]}
    assert options[36]["mileage"] == {
        "allowed_miles": 36000,
        "projected_miles": 45000,
        "excess_miles": 9000,
        "excess_fees": "2250.00",
        "is_overage": True,
        "utilization_percent": "125.00",
    }
    assert options[24]["mileage"]["excess_fees"] == "1500.00"


@pytest.mark.parametrize("miles", [-1, 200_001])
def test_lease_options_rejects_mileage_out_of_range(client: TestClient, miles: int) -> None:
    response = client.post(
        "/v1/financing/lease-options",
        json={"price": "30000", "estimated_miles_per_year": miles},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "estimated_miles_per_year"


# ==============================================================================
# POST /v1/financing/lease-vs-buy
# ==============================================================================


def test_lease_vs_buy(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/lease-vs-buy",
        json={"price": "30000", "credit_score_tier": "good", "term_months": 36},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["lease"]["term_months"] == 36
    assert data["financing"]["term_months"] == 36
    assert data["lease_cost"] == "19284.78"
    assert Decimal(data["lease_advantage"]) == (
        Decimal(data["finance_cost"]) - Decimal(data["lease_cost"])
    )
    assert data["vehicle_value_at_end"] == "16500.00"


def test_lease_vs_buy_uses_48_month_loan_for_short_lease(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/lease-vs-buy", json={"price": "30000", "term_months": 24}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["financing"]["term_months"] == 48
    assert Decimal(data["remaining_loan_balance"]) > 0


def test_lease_vs_buy_rejects_unsupported_term(client: TestClient) -> None:
    response = client.post(
        "/v1/financing/lease-vs-buy", json={"price": "30000", "term_months": 60}
    )

    assert response.status_code == 422
    assert response.json() == {
        "detail": "Validation failed",
        "code": "VALIDATION_ERROR",
        "errors": [
            {
                "field": "term_months",
                "message": "Lease term must be one of: 24, 36, 48",
                "code": "UNSUPPORTED_TERM",
            }
        ],
    }


def test_lease_vs_buy_internal_error_returns_500(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = InternalError(
        "No loan option for the lease term or its fallback", term_months=24
    )
    app.dependency_overrides[get_compare_lease_vs_buy_use_case] = lambda: mock_use_case

    response = client.post("/v1/financing/lease-vs-buy", json={"price": "30000"})

    assert response.status_code == 500
    assert response.json() == {
        "detail": "No loan option for the lease term or its fallback",
        "code": "INTERNAL_ERROR",
    }
