"""Repositories for document types and vendor documents."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, not_, or_

from vendorcomply.domain.document import DocumentType, VendorDocument
from vendorcomply.domain.enums import DocumentStatus
from vendorcomply.repositories.base import BaseRepository


class DocumentTypeRepository(BaseRepository[DocumentType]):
    model = DocumentType

    async def list_by_name(self) -> list[DocumentType]:
        return await self.list_all(order_by="name")


class VendorDocumentRepository(BaseRepository[VendorDocument]):
    model = VendorDocument

    async def list_for_vendor(self, vendor_id: str) -> list[VendorDocument]:
        return await self.list_all(filters={"vendor_id": vendor_id})

    async def list_for_vendors(self, vendor_ids: list[str]) -> list[VendorDocument]:
        if not vendor_ids:
            return []
        return await self.list_all(conditions=[VendorDocument.vendor_id.in_(vendor_ids)])

    def effective_status_condition(self, status: DocumentStatus, now: datetime):
        """SQL clause matching rows whose *effective* status is ``status`` at ``now``."""
        approved = VendorDocument.status == DocumentStatus.APPROVED.value
        lapsed = and_(VendorDocument.expiry_date.is_not(None), VendorDocument.expiry_date < now)
        if status is DocumentStatus.EXPIRED:
            return or_(VendorDocument.status == DocumentStatus.EXPIRED.value, and_(approved, lapsed))
        if status is DocumentStatus.APPROVED:
            return and_(approved, not_(lapsed))
        return VendorDocument.status == status.value

    async def list_approved_expiring(
        self, start: datetime, end: datetime
    ) -> list[VendorDocument]:
        """Approved documents whose expiry date falls in ``[start, end]``, soonest first."""
        return await self.list_all(
            filters={"status": DocumentStatus.APPROVED.value},
            conditions=[
                VendorDocument.expiry_date.is_not(None),
                VendorDocument.expiry_date >= start,
                VendorDocument.expiry_date <= end,
            ],
            order_by="expiry_date",
        )
