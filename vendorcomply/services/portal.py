"""Vendor portal token gate.

A portal token is an opaque, random, time-limited credential stored on the
vendor row. It lets an external supplier, without an account, read its own
vendor record and documents and upload documents for itself. Nothing else.

Exactly one token is live per vendor: issuing writes token and expiry in a
single UPDATE, replacing whatever was there. Resolution returns None for
unknown, expired and archived-vendor tokens alike, so callers cannot tell
whether a token ever existed.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import ensure_utc, utcnow
from vendorcomply.core.config import settings
from vendorcomply.core.exceptions import NotFoundError, PortalLinkError, ValidationError
from vendorcomply.domain.enums import ActionType, VendorStatus
from vendorcomply.domain.vendor import Vendor
from vendorcomply.repositories.vendor import VendorRepository, find_vendor_by_portal_token
from vendorcomply.services.audit import AuditService

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expiry: datetime


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


async def resolve_token(
    session: AsyncSession, token: str, now: datetime | None = None
) -> Vendor | None:
    """Return the vendor holding ``token`` if it is still valid at ``now``."""
    if not token:
        return None
    vendor = await find_vendor_by_portal_token(session, token)
    if vendor is None or vendor.portal_token_expiry is None:
        return None
    if ensure_utc(vendor.portal_token_expiry) < ensure_utc(now or utcnow()):
        return None
    if vendor.status == VendorStatus.INACTIVE.value:
        return None
    return vendor


async def require_portal_vendor(
    session: AsyncSession, token: str, now: datetime | None = None
) -> Vendor:
    vendor = await resolve_token(session, token, now)
    if vendor is None:
        raise PortalLinkError()
    return vendor


class PortalService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._vendors = VendorRepository(session, organization_id)
        self._audit = AuditService(session, organization_id)

    async def issue_token(
        self,
        vendor_id: str,
        validity_days: int | None = None,
        *,
        actor_id: str | None = None,
        now: datetime | None = None,
    ) -> IssuedToken:
        """Issue a fresh token for the vendor, invalidating any previous one."""
        days = settings.portal_token_validity_days if validity_days is None else validity_days
        if days < 1:
            raise ValidationError(
                "Portal link validity must be at least one day", field="validityDays"
            )
        vendor = await self._vendors.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)

        issued = IssuedToken(
            token=generate_token(),
            expiry=(now or utcnow()) + timedelta(days=days),
        )
        await self._vendors.set_portal_token(vendor_id, issued.token, issued.expiry)
        self._audit.record(
            ActionType.TOKEN_ISSUED,
            f"Portal link issued for {vendor.name}, valid {days} days",
            actor_id=actor_id,
            vendor_id=vendor_id,
            details={"expiry": issued.expiry.isoformat()},
        )
        logger.info("Portal token issued for vendor %s (expires %s)", vendor_id, issued.expiry)
        return issued
