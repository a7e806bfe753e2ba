"""Unit tests for API error handling."""

import pytest
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from dlmm.api.endpoints import get_config
from dlmm.api.main import app, status_code_for
from dlmm.config import QuoterConfig
from dlmm.constants import ACTIVE_ID, MAX_BIN_ID
from dlmm.errors import (
    BinArrayIndexMismatch,
    BinNotFound,
    DivisionByZero,
    InvalidSlippage,
    PairNotFound,
    SwapCrossesTooManyBins,
    ZeroAmount,
)
from tests.conftest import load_snapshot_json


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


def quote_body(**overrides) -> dict:
    body = {
        "snapshot": load_snapshot_json("flat_pair"),
        "amount": "1000000",
        "swapForY": True,
        "slippage": "0.5",
    }
    body.update(overrides)
    return body


class TestStatusCodeMapping:
    """Tests for the domain error -> HTTP status table."""

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (ZeroAmount("zero"), 400),
            (InvalidSlippage("bad"), 400),
            (BinArrayIndexMismatch("mismatch"), 400),
            (PairNotFound("missing"), 404),
            (BinNotFound("outside"), 422),
            (SwapCrossesTooManyBins("too many"), 422),
            (DivisionByZero("boom"), 500),
        ],
    )
    def test_status_code_for(self, error, status_code):
        """Each error class maps to its status."""
        assert status_code_for(error) == status_code


class TestQuoteRejections:
    """Tests for domain errors raised while quoting."""

    def test_zero_amount_returns_400(self, client):
        """A zero amount is rejected by the quoter."""
        with capture_logs() as logs:
            response = client.post("/quote", json=quote_body(amount="0"))

        assert response.status_code == 400
        assert response.json()["error"] == "ZeroAmount"
        assert any(log["event"] == "quote_rejected" for log in logs)

    @pytest.mark.parametrize("slippage", ["100", "-1", "250"])
    def test_invalid_slippage_returns_400(self, client, slippage):
        """Slippage outside [0, 100) is rejected."""
        response = client.post("/quote", json=quote_body(slippage=slippage))

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidSlippage"

    def test_too_many_bins_returns_422(self, client):
        """Draining the active bin with a cap of one bin aborts the quote."""
        app.dependency_overrides[get_config] = lambda: QuoterConfig(max_bin_crossings=1)

        response = client.post("/quote", json=quote_body(amount="2000000000"))

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "SwapCrossesTooManyBins"
        assert "1 bins" in data["detail"]

    def test_walk_out_of_window_returns_422(self, client):
        """Walking past the loaded bin arrays is BinNotFound."""
        app.dependency_overrides[get_config] = lambda: QuoterConfig(max_bin_crossings=1000)

        response = client.post(
            "/quote", json=quote_body(amount="5000000000", swapForY=False)
        )

        assert response.status_code == 422
        assert response.json()["error"] == "BinNotFound"

    def test_bin_in_wrong_array_returns_400(self, client):
        """A bin placed under a foreign array index is a snapshot error."""
        snapshot = load_snapshot_json("flat_pair")
        snapshot["binArrays"][1]["bins"].append(
            {"binId": 0, "reserveX": "1", "reserveY": "1", "totalSupply": "2"}
        )

        response = client.post("/quote", json=quote_body(snapshot=snapshot))

        assert response.status_code == 400
        assert response.json()["error"] == "BinArrayIndexMismatch"


class TestPriceRejections:
    """Tests for price conversions the Decimal range cannot represent."""

    def test_price_from_id_overflow_returns_400(self, client):
        """The top bin at the widest bin step has no representable price."""
        response = client.post(
            "/price/from-id",
            json={"binStep": 10_000, "binId": MAX_BIN_ID, "baseDecimals": 6, "quoteDecimals": 6},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidParameter"

    def test_price_to_id_overflow_returns_400(self, client):
        """A price beyond the Decimal exponent range is rejected, not a 500."""
        response = client.post(
            "/price/to-id",
            json={"price": "1e1000000", "binStep": 25, "baseDecimals": 6, "quoteDecimals": 6},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidParameter"


class TestInvalidJsonSchema:
    """Tests for invalid JSON schema handling."""

    def test_missing_snapshot(self, client):
        """Request without a snapshot returns 422."""
        body = quote_body()
        del body["snapshot"]

        response = client.post("/quote", json=body)

        assert response.status_code == 422
        assert "detail" in response.json()

    def test_missing_direction(self, client):
        """swapForY is required."""
        body = quote_body()
        del body["swapForY"]

        response = client.post("/quote", json=body)

        assert response.status_code == 422

    @pytest.mark.parametrize("amount", ["-1", "not-a-number", "1.5", str(2**64)])
    def test_invalid_amount(self, client, amount):
        """Amounts must be u64 decimal strings."""
        response = client.post("/quote", json=quote_body(amount=amount))

        assert response.status_code == 422

    def test_negative_reserve(self, client):
        """Bin reserves are unsigned."""
        snapshot = load_snapshot_json("flat_pair")
        snapshot["binArrays"][0]["bins"][0]["reserveY"] = "-1"

        response = client.post("/quote", json=quote_body(snapshot=snapshot))

        assert response.status_code == 422

    def test_bin_step_out_of_range(self, client):
        """binStep above 10000 is rejected at validation."""
        snapshot = load_snapshot_json("flat_pair")
        snapshot["pair"]["binStep"] = 10_001

        response = client.post("/quote", json=quote_body(snapshot=snapshot))

        assert response.status_code == 422

    def test_price_from_id_bin_id_out_of_range(self, client):
        """binId must be an unsigned 24-bit id."""
        response = client.post(
            "/price/from-id",
            json={"binStep": 100, "binId": ACTIVE_ID + 10**9, "baseDecimals": 6, "quoteDecimals": 6},
        )

        assert response.status_code == 422

    def test_price_from_id_decimals_out_of_range(self, client):
        """Token decimals must fit a byte."""
        response = client.post(
            "/price/from-id",
            json={"binStep": 25, "binId": 0, "baseDecimals": 256, "quoteDecimals": 6},
        )

        assert response.status_code == 422
