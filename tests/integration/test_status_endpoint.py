"""Integration tests for GET /api/status."""

import pytest

from tests.mocks import fake_services


@pytest.mark.asyncio
async def test_status_all_operational(client):
    resp = await client.get("/api/status")
    assert resp.status_code == 200
    data = resp.json()
    assert data["overall"] == "operational"
    assert data["uptimePercentage"] == 100.0
    assert len(data["services"]) == 6
    assert "lastUpdated" in data


@pytest.mark.asyncio
async def test_status_one_503_of_six(client):
    fake_services.set_behaviour("webhooks", 503, "Service Unavailable")

    resp = await client.get("/api/status")

    assert resp.status_code == 200
    data = resp.json()
    assert data["overall"] == "degraded"
    assert data["uptimePercentage"] == 83.33
    webhooks = next(s for s in data["services"] if s["serviceId"] == "webhooks")
    assert webhooks["status"] == "outage"
    assert webhooks["error"] == "HTTP 503"


@pytest.mark.asyncio
async def test_status_service_fields(client):
    resp = await client.get("/api/status")
    for svc in resp.json()["services"]:
        assert set(svc) >= {"serviceId", "name", "group", "status", "latency", "lastChecked", "error"}


@pytest.mark.asyncio
async def test_status_empty_registry_is_server_error(client, app_with_state):
    app_with_state.state.services = ()

    resp = await client.get("/api/status")

    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "aggregation_failed"
    assert error["message"] == "Failed to check services."
    assert "details" not in error
