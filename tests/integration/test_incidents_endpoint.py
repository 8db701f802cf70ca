"""Integration tests for GET /api/incidents."""

import pytest


@pytest.mark.asyncio
async def test_incidents_default_is_active(client):
    resp = await client.get("/api/incidents")
    assert resp.status_code == 200
    incidents = resp.json()["incidents"]
    assert [i["id"] for i in incidents] == ["2025-02-01-api-errors"]
    assert incidents[0]["affectedServices"] == ["rest-api", "graphql"]
    assert incidents[0]["status"] == "identified"


@pytest.mark.asyncio
async def test_incidents_maintenance(client):
    resp = await client.get("/api/incidents?type=maintenance")
    assert resp.status_code == 200
    maintenance = resp.json()["maintenance"]
    assert [m["id"] for m in maintenance] == ["2099-06-01-database-upgrade"]
    assert maintenance[0]["scheduledStart"].startswith("2099-06-01T02:00:00")


@pytest.mark.asyncio
async def test_incidents_recent_with_limit(client):
    resp = await client.get("/api/incidents?type=recent&limit=2")
    assert resp.status_code == 200
    assert len(resp.json()["incidents"]) == 2


@pytest.mark.asyncio
async def test_incidents_all(client):
    resp = await client.get("/api/incidents?type=all")
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"activeIncidents", "scheduledMaintenance", "recentIncidents"}
    assert len(data["recentIncidents"]) == 3


@pytest.mark.asyncio
async def test_incidents_updates_newest_first(client):
    resp = await client.get("/api/incidents?type=recent")
    webhook = next(i for i in resp.json()["incidents"] if i["id"] == "2025-01-10-webhook-delays")
    assert webhook["status"] == "resolved"
    assert [u["status"] for u in webhook["updates"]] == ["resolved", "investigating"]


@pytest.mark.asyncio
async def test_incidents_invalid_type(client):
    resp = await client.get("/api/incidents?type=everything")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_type"


@pytest.mark.asyncio
async def test_incidents_invalid_limit(client):
    resp = await client.get("/api/incidents?type=recent&limit=0")
    assert resp.status_code == 422
