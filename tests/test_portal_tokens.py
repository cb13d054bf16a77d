"""Portal link issuance and resolution."""

from datetime import timedelta

import pytest

from vendorcomply.core.exceptions import NotFoundError, PortalLinkError, ValidationError
from vendorcomply.domain.enums import VendorStatus
from vendorcomply.domain.vendor import Vendor
from vendorcomply.services.portal import PortalService, require_portal_vendor, resolve_token
from tests.factories import NOW, ORG_ID, add_vendor


@pytest.fixture
async def vendor(session):
    return await add_vendor(session, "FreightCo", "Logistics")


async def test_token_valid_until_expiry(session, vendor):
    issued = await PortalService(session, ORG_ID).issue_token(vendor.id, 30, now=NOW)

    assert issued.expiry == NOW + timedelta(days=30)
    assert (await resolve_token(session, issued.token, NOW + timedelta(days=29))).id == vendor.id
    assert await resolve_token(session, issued.token, NOW + timedelta(days=31)) is None


async def test_reissue_invalidates_previous_token(session, vendor):
    svc = PortalService(session, ORG_ID)
    first = await svc.issue_token(vendor.id, 30, now=NOW)
    second = await svc.issue_token(vendor.id, 7, now=NOW)

    assert first.token != second.token
    assert await resolve_token(session, first.token, NOW) is None
    resolved = await resolve_token(session, second.token, NOW)
    assert resolved.id == vendor.id
    assert resolved.portal_token_expiry.replace(tzinfo=None) == (NOW + timedelta(days=7)).replace(tzinfo=None)


async def test_default_validity_from_settings(session, vendor):
    issued = await PortalService(session, ORG_ID).issue_token(vendor.id, now=NOW)
    assert issued.expiry == NOW + timedelta(days=30)


async def test_unknown_and_expired_tokens_look_the_same(session, vendor):
    issued = await PortalService(session, ORG_ID).issue_token(vendor.id, 1, now=NOW)

    with pytest.raises(PortalLinkError) as unknown:
        await require_portal_vendor(session, "never-issued", NOW)
    with pytest.raises(PortalLinkError) as expired:
        await require_portal_vendor(session, issued.token, NOW + timedelta(days=2))

    assert unknown.value.status_code == expired.value.status_code == 404
    assert unknown.value.message == expired.value.message


async def test_archived_vendor_token_does_not_resolve(session):
    archived = await add_vendor(session, "OldCo", "Logistics", status=VendorStatus.INACTIVE.value)
    issued = await PortalService(session, ORG_ID).issue_token(archived.id, 30, now=NOW)
    assert await resolve_token(session, issued.token, NOW) is None


async def test_empty_token(session):
    assert await resolve_token(session, "", NOW) is None


async def test_issue_for_unknown_vendor(session):
    with pytest.raises(NotFoundError):
        await PortalService(session, ORG_ID).issue_token("missing", 30, now=NOW)


@pytest.mark.parametrize("days", [0, -5])
async def test_non_positive_validity_rejected(session, vendor, days):
    with pytest.raises(ValidationError) as exc:
        await PortalService(session, ORG_ID).issue_token(vendor.id, days, now=NOW)

    assert exc.value.field == "validityDays"
    assert (await session.get(Vendor, vendor.id)).portal_token is None
