"""Vendor repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.domain.vendor import Vendor
from vendorcomply.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    def search_condition(self, search: str):
        """Case-insensitive substring match over name and contact email."""
        pattern = f"%{search}%"
        return or_(
            Vendor.name.ilike(pattern),
            Vendor.primary_contact_email.ilike(pattern),
        )

    async def set_portal_token(self, vendor_id: str, token: str, expiry: datetime) -> bool:
        """Replace token and expiry in a single UPDATE so they always change together."""
        result = await self._session.execute(
            self._scoped_update(vendor_id).values(
                portal_token=token, portal_token_expiry=expiry
            )
        )
        await self._session.flush()
        return result.rowcount > 0


async def find_vendor_by_portal_token(session: AsyncSession, token: str) -> Vendor | None:
    """Look a vendor up by portal token across all organizations.

    Portal callers are unauthenticated, so there is no organization to scope by
    until the token itself has been resolved.
    """
    result = await session.execute(select(Vendor).where(Vendor.portal_token == token))
    return result.scalars().first()
