"""Unit tests for status aggregation (statusboard/services/aggregator.py)."""

import itertools
import random
from datetime import datetime, timezone

import pytest

from statusboard.core.exceptions import AggregationError
from statusboard.schemas.health import ServiceHealth
from statusboard.services.aggregator import check_all_services, reduce_overall, snapshot_uptime
from tests.helpers import make_services
from tests.mocks import fake_services

STATUSES = ["operational", "degraded", "outage", "unknown"]


def _all_multisets(max_size=4):
    for size in range(1, max_size + 1):
        yield from itertools.combinations_with_replacement(STATUSES, size)


class TestReduceOverall:
    def test_all_outage(self):
        for size in range(1, 6):
            assert reduce_overall(["outage"] * size) == "outage"

    def test_all_unknown(self):
        for size in range(1, 6):
            assert reduce_overall(["unknown"] * size) == "unknown"

    def test_partial_outage_is_degraded(self):
        for statuses in _all_multisets():
            if "outage" in statuses and any(s != "outage" for s in statuses):
                assert reduce_overall(statuses) == "degraded", statuses

    def test_any_degraded_is_degraded(self):
        for statuses in _all_multisets():
            if "degraded" in statuses:
                assert reduce_overall(statuses) == "degraded", statuses

    def test_otherwise_operational(self):
        for statuses in _all_multisets():
            if "outage" in statuses or "degraded" in statuses:
                continue
            if all(s == "unknown" for s in statuses):
                continue
            assert reduce_overall(statuses) == "operational", statuses

    def test_order_independent(self):
        rng = random.Random(7)
        for statuses in _all_multisets():
            shuffled = list(statuses)
            rng.shuffle(shuffled)
            assert reduce_overall(shuffled) == reduce_overall(statuses)

    def test_empty_raises(self):
        with pytest.raises(AggregationError):
            reduce_overall([])


def _health(status):
    return ServiceHealth(
        service_id="x",
        name="X",
        group="core",
        status=status,
        last_checked=datetime.now(timezone.utc),
    )


class TestSnapshotUptime:
    def test_five_of_six(self):
        healths = [_health("operational")] * 5 + [_health("outage")]
        assert snapshot_uptime(healths) == 83.33

    def test_unknown_not_counted_as_operational(self):
        assert snapshot_uptime([_health("operational"), _health("unknown")]) == 50.0

    def test_empty(self):
        assert snapshot_uptime([]) == 0.0


@pytest.mark.asyncio
class TestCheckAllServices:
    async def test_one_503_of_six(self, fake_client, services):
        fake_services.set_behaviour("webhooks", 503, "Service Unavailable")

        status = await check_all_services(services, fake_client)

        assert status.overall == "degraded"
        assert status.uptime_percentage == 83.33
        assert len(status.services) == 6
        assert [s.service_id for s in status.services] == [s.id for s in services]

    async def test_all_operational(self, fake_client, services):
        status = await check_all_services(services, fake_client)
        assert status.overall == "operational"
        assert status.uptime_percentage == 100.0

    async def test_all_down(self, fake_client, services):
        for svc in services:
            fake_services.set_behaviour(svc.id, 500, "error")
        status = await check_all_services(services, fake_client)
        assert status.overall == "outage"
        assert status.uptime_percentage == 0.0

    async def test_slow_service_does_not_abort_batch(self, fake_client, services):
        fake_services.set_behaviour("graphql", 200, {"status": "ok"}, delay=1.0)

        status = await check_all_services(services, fake_client, timeout=0.1)

        by_id = {s.service_id: s for s in status.services}
        assert by_id["graphql"].status == "outage"
        assert by_id["graphql"].error == "Request timeout"
        assert all(s.status == "operational" for sid, s in by_id.items() if sid != "graphql")
        assert status.overall == "degraded"

    async def test_empty_registry_raises(self, fake_client):
        with pytest.raises(AggregationError):
            await check_all_services((), fake_client)
