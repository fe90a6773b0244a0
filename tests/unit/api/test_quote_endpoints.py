"""Unit tests for the quote API endpoints."""

import pytest
from fastapi.testclient import TestClient

from pairswap import __version__
from pairswap.api.endpoints import get_config
from pairswap.api.main import app
from pairswap.config import EngineConfig
from pairswap.pools.addressing import pool_for
from tests.helpers import REGISTRY, TOKEN_A, TOKEN_B


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


class TestSingleHop:
    def test_amount_out(self, client):
        response = client.post(
            "/quote/amount-out",
            json={"amountIn": "1000", "reserveIn": "10000", "reserveOut": "10000"},
        )
        assert response.status_code == 200
        assert response.json() == {"amount": "906"}

    def test_amount_out_accepts_snake_case_and_ints(self, client):
        response = client.post(
            "/quote/amount-out",
            json={"amount_in": 1000, "reserve_in": 10000, "reserve_out": 10000},
        )
        assert response.json() == {"amount": "906"}

    def test_amount_in(self, client):
        response = client.post(
            "/quote/amount-in",
            json={"amountOut": "906", "reserveIn": "10000", "reserveOut": "10000"},
        )
        assert response.json() == {"amount": "1000"}

    def test_fee_from_config(self, client):
        app.dependency_overrides[get_config] = lambda: EngineConfig(swap_fee_bps=0)
        response = client.post(
            "/quote/amount-out",
            json={"amountIn": "1000", "reserveIn": "10000", "reserveOut": "10000"},
        )
        assert response.json() == {"amount": "909"}


class TestMultiHop:
    def test_amounts_out(self, client):
        response = client.post(
            "/quote/amounts-out",
            json={"amountIn": "1000", "reserves": [["10000", "10000"], ["10000", "10000"]]},
        )
        assert response.status_code == 200
        assert response.json() == {"amounts": ["1000", "906", "828"]}

    def test_amounts_in(self, client):
        response = client.post(
            "/quote/amounts-in",
            json={"amountOut": "906", "reserves": [["10000", "10000"]]},
        )
        assert response.json() == {"amounts": ["1000", "906"]}

    def test_empty_route_is_validation_error(self, client):
        response = client.post("/quote/amounts-out", json={"amountIn": "1000", "reserves": []})
        assert response.status_code == 422

    def test_large_amounts_survive_json(self, client):
        big = str(10**30)
        response = client.post(
            "/quote/amounts-out",
            json={"amountIn": big, "reserves": [[big, big]]},
        )
        assert response.status_code == 200
        assert int(response.json()["amounts"][1]) < 10**30


class TestPoolAddress:
    def test_derivation(self, client):
        response = client.get(
            "/pools/address",
            params={"registry": REGISTRY, "token_a": TOKEN_B, "token_b": TOKEN_A},
        )
        assert response.status_code == 200
        assert response.json() == {
            "pool": pool_for(REGISTRY, TOKEN_A, TOKEN_B),
            "token0": TOKEN_A,
            "token1": TOKEN_B,
        }
