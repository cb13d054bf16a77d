"""Vendor document lifecycle: upload, review, listing.

Transitions:

    (missing) --upload--> pending --approve--> approved
                          pending --reject---> rejected

Approve and reject are compare-and-set updates keyed on ``status = 'pending'``,
so of two concurrent reviewers exactly one succeeds and the other gets
``InvalidStateError``. ``expired`` is never written here; see ``status.py``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import ensure_utc, utcnow
from vendorcomply.core.config import settings
from vendorcomply.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from vendorcomply.core.pagination import PaginationParams
from vendorcomply.domain.document import DocumentType, VendorDocument
from vendorcomply.domain.enums import ActionType, ActorType, DocumentStatus
from vendorcomply.domain.vendor import Vendor
from vendorcomply.repositories.document import (
    DocumentTypeRepository,
    VendorDocumentRepository,
)
from vendorcomply.repositories.vendor import VendorRepository
from vendorcomply.services.audit import AuditService
from vendorcomply.services.file_storage import StoredFile, delete_upload

logger = logging.getLogger(__name__)


def resolve_expiry(
    doc_type: DocumentType,
    issue_date: datetime | None,
    expiry_date: datetime | None,
    now: datetime,
) -> datetime | None:
    """Work out the expiry date to store for a new upload.

    An explicit expiry wins. Otherwise the type's default validity period runs
    from the issue date (or from ``now`` when there is none). Types flagged
    ``expiry_required`` must end up with an expiry date.
    """
    if expiry_date is None and doc_type.default_validity_days:
        expiry_date = (issue_date or now) + timedelta(days=doc_type.default_validity_days)
    if expiry_date is None and doc_type.expiry_required:
        raise ValidationError(
            f"An expiry date is required for '{doc_type.name}'", field="expiryDate"
        )
    if expiry_date is not None and issue_date is not None and expiry_date < issue_date:
        raise ValidationError("Expiry date cannot be before the issue date", field="expiryDate")
    return expiry_date


class DocumentService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._repo = VendorDocumentRepository(session, organization_id)
        self._types = DocumentTypeRepository(session, organization_id)
        self._vendors = VendorRepository(session, organization_id)
        self._audit = AuditService(session, organization_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_document(self, document_id: str) -> VendorDocument:
        doc = await self._repo.get_by_id(document_id)
        if not doc:
            raise NotFoundError("Document", document_id)
        return doc

    async def list_documents(
        self,
        pagination: PaginationParams,
        *,
        vendor_id: str | None = None,
        document_type_id: str | None = None,
        status: DocumentStatus | None = None,
        now: datetime | None = None,
    ) -> tuple[list[VendorDocument], int]:
        """List documents; ``status`` filters on effective status, not the stored column."""
        conditions = []
        if status is not None:
            conditions.append(self._repo.effective_status_condition(status, now or utcnow()))
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters={"vendor_id": vendor_id, "document_type_id": document_type_id},
            conditions=conditions,
        )

    async def list_for_vendor(self, vendor_id: str) -> list[VendorDocument]:
        return await self._repo.list_for_vendor(vendor_id)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def upload(
        self,
        vendor_id: str,
        document_type_id: str,
        file: StoredFile,
        *,
        issue_date: datetime | None = None,
        expiry_date: datetime | None = None,
        notes: str | None = None,
        actor_id: str,
        actor_type: ActorType = ActorType.USER,
        now: datetime | None = None,
    ) -> VendorDocument:
        """Create a ``pending`` document for a type applicable to the vendor's category."""
        now = now or utcnow()
        vendor, doc_type = await self.check_upload_target(vendor_id, document_type_id)

        issue_date = ensure_utc(issue_date)
        expiry_date = resolve_expiry(doc_type, issue_date, ensure_utc(expiry_date), now)

        doc = await self._repo.create(
            vendor_id=vendor.id,
            document_type_id=doc_type.id,
            status=DocumentStatus.PENDING.value,
            file_name=file.file_name,
            file_path=file.file_path,
            file_size=file.file_size,
            issue_date=issue_date,
            expiry_date=expiry_date,
            uploaded_by=actor_id,
            uploader_type=actor_type.value,
            uploaded_at=now,
            notes=notes,
        )
        self._audit.record(
            ActionType.UPLOADED,
            f"Document uploaded: {file.file_name} ({doc_type.name})",
            actor_id=actor_id,
            actor_type=actor_type,
            vendor_id=vendor.id,
            vendor_document_id=doc.id,
        )
        logger.info("Document %s uploaded for vendor %s (%s)", doc.id, vendor.id, doc_type.name)
        return doc

    async def approve(
        self,
        document_id: str,
        actor_id: str,
        notes: str | None = None,
        *,
        now: datetime | None = None,
    ) -> VendorDocument:
        now = now or utcnow()
        values = {
            "status": DocumentStatus.APPROVED.value,
            "approved_by": actor_id,
            "approved_at": now,
            "reviewed_by": actor_id,
            "reviewed_at": now,
        }
        if notes is not None:
            values["notes"] = notes
        doc = await self._transition(document_id, "approve", values)
        self._audit.record(
            ActionType.APPROVED,
            "Document approved",
            actor_id=actor_id,
            vendor_id=doc.vendor_id,
            vendor_document_id=doc.id,
            details={"notes": notes} if notes else None,
        )
        return doc

    async def reject(
        self,
        document_id: str,
        reason: str,
        actor_id: str | None = None,
        *,
        now: datetime | None = None,
    ) -> VendorDocument:
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("Rejection reason is required", field="rejectionReason")
        now = now or utcnow()
        doc = await self._transition(
            document_id,
            "reject",
            {
                "status": DocumentStatus.REJECTED.value,
                "rejection_reason": reason,
                "reviewed_by": actor_id,
                "reviewed_at": now,
            },
        )
        self._audit.record(
            ActionType.REJECTED,
            f"Document rejected: {reason}",
            actor_id=actor_id,
            actor_type=ActorType.USER if actor_id else ActorType.SYSTEM,
            vendor_id=doc.vendor_id,
            vendor_document_id=doc.id,
        )
        return doc

    async def delete_document(self, document_id: str, actor_id: str) -> None:
        doc = await self.get_document(document_id)
        await self._repo.hard_delete(doc.id)
        if doc.file_path and not delete_upload(doc.file_path, settings.upload_dir):
            logger.warning("Stored file for document %s not found: %s", doc.id, doc.file_path)
        self._audit.record(
            ActionType.DELETED,
            f"Document deleted: {doc.file_name or doc.id}",
            actor_id=actor_id,
            vendor_id=doc.vendor_id,
            details={"documentId": doc.id, "documentTypeId": doc.document_type_id},
        )

    async def check_upload_target(
        self,
        vendor_id: str,
        document_type_id: str,
        *,
        issue_date: datetime | None = None,
        expiry_date: datetime | None = None,
        now: datetime | None = None,
    ) -> tuple[Vendor, DocumentType]:
        """Run every upload check that does not need the file itself.

        Vendor must exist; the type must exist and apply to the vendor's
        category; the dates must resolve to a valid expiry. Routers call this
        before writing anything to disk.
        """
        vendor = await self._vendors.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        doc_type = await self._applicable_type(vendor, document_type_id)
        resolve_expiry(doc_type, ensure_utc(issue_date), ensure_utc(expiry_date), now or utcnow())
        return vendor, doc_type

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _applicable_type(self, vendor: Vendor, document_type_id: str) -> DocumentType:
        doc_type = await self._types.get_by_id(document_type_id)
        if not doc_type:
            raise ValidationError(
                f"Document type '{document_type_id}' does not exist", field="documentTypeId"
            )
        if not doc_type.applies_to(vendor.category):
            raise ValidationError(
                f"Document type '{doc_type.name}' does not apply to vendor category "
                f"'{vendor.category}'",
                field="documentTypeId",
            )
        return doc_type

    async def _transition(self, document_id: str, verb: str, values: dict) -> VendorDocument:
        current = await self.get_document(document_id)
        applied = await self._repo.update_if(
            document_id, {"status": DocumentStatus.PENDING.value}, **values
        )
        if not applied:
            # Re-read: a concurrent reviewer may have moved it since ``current`` was loaded
            latest = await self._repo.reload(document_id)
            state = latest.status if latest else current.status
            raise InvalidStateError(
                f"Cannot {verb} document '{document_id}': status is '{state}', expected 'pending'"
            )
        doc = await self._repo.reload(document_id)
        logger.info("Document %s: %s -> %s", document_id, current.status, values["status"])
        return doc  # type: ignore[return-value]
