"""Tests for the compliance endpoints.

Covers: GET /compliance/cb (snapshot storage, custom target, 404),
GET /compliance/adjusted-cb (banked movements netted out).
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.usefixtures("seeded_routes")

TARGET = 89.3368


class TestComputeCB:
    async def test_deficit_route(self, client: AsyncClient) -> None:
        response = await client.get("/compliance/cb", params={"route_id": "R001", "year": 2024})
        assert response.status_code == 200
        data = response.json()
        assert data["ship_id"] == "R001"
        assert data["energy_mj"] == 205_000_000
        assert data["cb_gco2eq"] == pytest.approx((TARGET - 91.0) * 205_000_000, abs=1e-2)
        assert data["status"] == "DEFICIT"
        assert data["target_gco2eq_per_mj"] == pytest.approx(TARGET)
        assert data["actual_gco2eq_per_mj"] == 91.0
        assert data["route_id"] == "R001"
        assert data["created_at"] is not None

    async def test_surplus_route(self, client: AsyncClient) -> None:
        response = await client.get("/compliance/cb", params={"route_id": "R002", "year": 2024})
        data = response.json()
        assert data["cb_gco2eq"] == pytest.approx((TARGET - 88.0) * 196_800_000, abs=1e-2)
        assert data["status"] == "SURPLUS"

    async def test_custom_target(self, client: AsyncClient) -> None:
        response = await client.get(
            "/compliance/cb", params={"route_id": "R001", "year": 2024, "target": 91.0},
        )
        data = response.json()
        assert data["cb_gco2eq"] == 0
        assert data["status"] == "NEUTRAL"

    async def test_each_call_stores_new_snapshot(self, client: AsyncClient) -> None:
        first = await client.get("/compliance/cb", params={"route_id": "R001", "year": 2024})
        second = await client.get("/compliance/cb", params={"route_id": "R001", "year": 2024})
        assert first.json()["snapshot_id"] != second.json()["snapshot_id"]

    async def test_infinite_target_400_stores_nothing(self, client: AsyncClient) -> None:
        response = await client.get(
            "/compliance/cb", params={"route_id": "R001", "year": 2024, "target": "inf"},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "InvalidInput"

        adjusted = await client.get("/compliance/adjusted-cb", params={"year": 2024})
        assert adjusted.json() == []

        bank = await client.post(
            "/banking/bank", json={"ship_id": "R001", "year": 2024, "amount": 1e300},
        )
        assert bank.status_code == 404
        assert bank.json()["detail"]["kind"] == "NoSnapshot"

    async def test_unknown_route_404(self, client: AsyncClient) -> None:
        response = await client.get("/compliance/cb", params={"route_id": "R999", "year": 2024})
        assert response.status_code == 404

    async def test_missing_year_422(self, client: AsyncClient) -> None:
        response = await client.get("/compliance/cb", params={"route_id": "R001"})
        assert response.status_code == 422


class TestAdjustedCB:
    async def test_empty_year(self, client: AsyncClient) -> None:
        response = await client.get("/compliance/adjusted-cb", params={"year": 2030})
        assert response.status_code == 200
        assert response.json() == []

    async def test_nets_out_banked_sum(self, client: AsyncClient) -> None:
        await client.get("/compliance/cb", params={"route_id": "R001", "year": 2024})
        snap = (await client.get(
            "/compliance/cb", params={"route_id": "R002", "year": 2024},
        )).json()
        await client.post(
            "/banking/bank", json={"ship_id": "R002", "year": 2024, "amount": 100_000.0},
        )

        response = await client.get("/compliance/adjusted-cb", params={"year": 2024})
        rows = {r["ship_id"]: r for r in response.json()}
        assert list(rows) == ["R001", "R002"]
        assert rows["R001"]["banked"] == 0
        assert rows["R001"]["cb_after"] == rows["R001"]["cb_before"]
        assert rows["R002"]["banked"] == 100_000.0
        assert rows["R002"]["cb_before"] == pytest.approx(snap["cb_gco2eq"])
        assert rows["R002"]["cb_after"] == pytest.approx(snap["cb_gco2eq"] - 100_000.0)
