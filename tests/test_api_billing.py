"""Plan ceilings on the Free tier."""

import pytest

from vendorcomply.domain.enums import PlanTier
from vendorcomply.services.billing import PLAN_LIMITS, UNLIMITED, can_add
from tests.factories import ADMIN_HEADERS, add_vendor

API = "/api/v1"


@pytest.fixture
def plan():
    return PlanTier.FREE


def test_can_add():
    assert can_add(10, 9)
    assert not can_add(10, 10)
    assert can_add(UNLIMITED, 10_000)


async def test_plans_listed(client):
    resp = await client.get(f"{API}/billing/plans")
    plans = {p["tier"]: p for p in resp.json()["data"]}
    assert set(plans) == {"free", "pro", "pro_plus"}
    assert plans["free"]["maxVendors"] == PLAN_LIMITS[PlanTier.FREE].max_vendors
    assert plans["pro_plus"]["maxDocuments"] == -1


async def test_vendor_ceiling(client, session):
    for i in range(PLAN_LIMITS[PlanTier.FREE].max_vendors):
        await add_vendor(session, f"Vendor {i}", "Packaging")

    resp = await client.post(
        f"{API}/vendors", json={"name": "One too many", "category": "Packaging"}, headers=ADMIN_HEADERS
    )

    assert resp.status_code == 402
    assert resp.json()["error"]["code"] == "PLAN_LIMIT_REACHED"


async def test_second_user_over_ceiling(client):
    assert (await client.get(f"{API}/auth/user", headers=ADMIN_HEADERS)).status_code == 200

    resp = await client.get(f"{API}/auth/user", headers={"X-User-Id": "second"})
    assert resp.status_code == 402


async def test_usage(client, session):
    await add_vendor(session, "BoxCo", "Packaging")

    resp = await client.get(f"{API}/billing/usage", headers=ADMIN_HEADERS)

    data = resp.json()["data"]
    assert data["plan"] == "free"
    assert data["vendors"] == {"used": 1, "limit": 10, "canAdd": True}
    assert data["users"] == {"used": 1, "limit": 1, "canAdd": False}
