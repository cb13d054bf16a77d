"""Vendor service — registry of suppliers.

Vendors are never hard-deleted: archiving flips status to ``inactive``.
Plan ceilings are checked by the API layer before ``create_vendor``.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.exceptions import NotFoundError
from vendorcomply.core.pagination import PaginationParams
from vendorcomply.domain.enums import ActionType, VendorStatus
from vendorcomply.domain.vendor import Vendor
from vendorcomply.repositories.vendor import VendorRepository
from vendorcomply.schemas.vendor import VendorCreate, VendorUpdate
from vendorcomply.services.audit import AuditService

class VendorService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._repo = VendorRepository(session, organization_id)
        self._audit = AuditService(session, organization_id)

    async def list_vendors(
        self,
        pagination: PaginationParams,
        *,
        category: str | None = None,
        status: str | None = None,
        risk_level: str | None = None,
        search: str | None = None,
    ):
        filters = {"category": category, "status": status, "risk_level": risk_level}
        conditions = [self._repo.search_condition(search)] if search else None
        items, total = await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters=filters,
            conditions=conditions,
        )
        return items, total

    async def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._repo.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def create_vendor(self, data: VendorCreate, actor_id: str) -> Vendor:
        vendor = await self._repo.create(**data.model_dump(mode="json", exclude_none=True))
        self._audit.record(
            ActionType.CREATED,
            f"Vendor {vendor.name} created",
            actor_id=actor_id,
            vendor_id=vendor.id,
        )
        return vendor

    async def update_vendor(self, vendor_id: str, data: VendorUpdate, actor_id: str) -> Vendor:
        _ = await self.get_vendor(vendor_id)  # raises 404 if missing
        changes = data.model_dump(mode="json", exclude_none=True, exclude_unset=True)
        updated = await self._repo.update(vendor_id, **changes)
        self._audit.record(
            ActionType.UPDATED,
            f"Vendor {updated.name} updated",  # type: ignore[union-attr]
            actor_id=actor_id,
            vendor_id=vendor_id,
            details={"fields": sorted(changes)},
        )
        return updated  # type: ignore[return-value]

    async def archive_vendor(self, vendor_id: str, actor_id: str) -> Vendor:
        vendor = await self.get_vendor(vendor_id)
        archived = await self._repo.update(vendor_id, status=VendorStatus.INACTIVE.value)
        self._audit.record(
            ActionType.ARCHIVED,
            f"Vendor {vendor.name} archived",
            actor_id=actor_id,
            vendor_id=vendor_id,
        )
        return archived  # type: ignore[return-value]
