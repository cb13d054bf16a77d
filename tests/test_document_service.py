"""Upload and review workflow against a real (SQLite) session."""

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy import select

from vendorcomply.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from vendorcomply.core.pagination import PaginationParams
from vendorcomply.domain.audit import AuditLog
from vendorcomply.domain.enums import ActorType, DocumentStatus
from vendorcomply.repositories.document import VendorDocumentRepository
from vendorcomply.services.compliance import ComplianceService
from vendorcomply.services.documents import DocumentService
from vendorcomply.services.file_storage import StoredFile
from tests.factories import NOW, ORG_ID, add_document, add_document_type, add_vendor

FILE = StoredFile(file_name="iso.pdf", file_path="2026/06/v/abc_iso.pdf", file_size=1024)


def _page() -> PaginationParams:
    return PaginationParams(page=1, limit=50, sort="createdAt", order="desc")


@pytest.fixture
async def packaging(session):
    vendor = await add_vendor(session, "BoxCo", "Packaging")
    iso = await add_document_type(session, "ISO 9001", ["Packaging"])
    return vendor, iso


class TestUpload:
    async def test_upload_creates_pending_document(self, session, packaging):
        vendor, iso = packaging
        svc = DocumentService(session, ORG_ID)

        doc = await svc.upload(vendor.id, iso.id, FILE, actor_id="admin-1", now=NOW)

        assert doc.status == DocumentStatus.PENDING.value
        assert doc.uploaded_by == "admin-1"
        assert doc.uploader_type == ActorType.USER.value
        assert doc.file_path == FILE.file_path

    async def test_portal_upload_records_vendor_as_uploader(self, session, packaging):
        vendor, iso = packaging
        doc = await DocumentService(session, ORG_ID).upload(
            vendor.id, iso.id, FILE, actor_id=vendor.id, actor_type=ActorType.VENDOR, now=NOW
        )
        assert doc.uploaded_by == vendor.id
        assert doc.uploader_type == "vendor"

    async def test_type_not_applicable_to_category(self, session, packaging):
        vendor, _ = packaging
        haz = await add_document_type(session, "Hazmat Permit", ["Chemicals"])
        with pytest.raises(ValidationError) as exc:
            await DocumentService(session, ORG_ID).upload(
                vendor.id, haz.id, FILE, actor_id="admin-1", now=NOW
            )
        assert exc.value.field == "documentTypeId"

    async def test_unknown_vendor(self, session, packaging):
        _, iso = packaging
        with pytest.raises(NotFoundError):
            await DocumentService(session, ORG_ID).upload(
                "no-such-vendor", iso.id, FILE, actor_id="admin-1", now=NOW
            )

    async def test_default_validity_sets_expiry(self, session, packaging):
        vendor, _ = packaging
        permit = await add_document_type(
            session, "Permit", ["Packaging"], expiry_required=True, default_validity_days=365
        )
        doc = await DocumentService(session, ORG_ID).upload(
            vendor.id, permit.id, FILE, actor_id="admin-1", issue_date=NOW, now=NOW
        )
        assert doc.expiry_date.replace(tzinfo=None) == (NOW + timedelta(days=365)).replace(tzinfo=None)

    async def test_upload_target_check_covers_expiry(self, session, packaging):
        vendor, _ = packaging
        permit = await add_document_type(session, "Permit", ["Packaging"], expiry_required=True)
        svc = DocumentService(session, ORG_ID)

        with pytest.raises(ValidationError) as exc:
            await svc.check_upload_target(vendor.id, permit.id, now=NOW)
        assert exc.value.field == "expiryDate"

        checked_vendor, checked_type = await svc.check_upload_target(
            vendor.id, permit.id, expiry_date=NOW + timedelta(days=90), now=NOW
        )
        assert (checked_vendor.id, checked_type.id) == (vendor.id, permit.id)


class TestReview:
    async def test_iso_scenario(self, session, packaging):
        """No documents -> 0%; upload -> pending; approve once -> 100%; approve again -> conflict."""
        vendor, iso = packaging
        compliance = ComplianceService(session, ORG_ID)
        svc = DocumentService(session, ORG_ID)

        summary = await compliance.vendor_compliance(vendor.id, NOW)
        assert (summary.approved_count, summary.total_required, summary.percentage) == (0, 1, 0)

        doc = await svc.upload(vendor.id, iso.id, FILE, actor_id="admin-1", now=NOW)
        approved = await svc.approve(doc.id, "reviewer-1", now=NOW)
        assert approved.status == DocumentStatus.APPROVED.value
        assert approved.approved_by == "reviewer-1"

        with pytest.raises(InvalidStateError):
            await svc.approve(doc.id, "reviewer-2", now=NOW)

        summary = await compliance.vendor_compliance(vendor.id, NOW)
        assert summary.percentage == 100

    async def test_reject_requires_reason(self, session, packaging):
        vendor, iso = packaging
        doc = await add_document(session, vendor, iso)
        with pytest.raises(ValidationError) as exc:
            await DocumentService(session, ORG_ID).reject(doc.id, "   ", "reviewer-1")
        assert exc.value.field == "rejectionReason"

    async def test_reject_pending(self, session, packaging):
        vendor, iso = packaging
        doc = await add_document(session, vendor, iso)
        rejected = await DocumentService(session, ORG_ID).reject(doc.id, " Blurry scan ", "reviewer-1")
        assert rejected.status == DocumentStatus.REJECTED.value
        assert rejected.rejection_reason == "Blurry scan"

    async def test_cannot_reject_approved(self, session, packaging):
        vendor, iso = packaging
        doc = await add_document(session, vendor, iso, DocumentStatus.APPROVED)
        with pytest.raises(InvalidStateError):
            await DocumentService(session, ORG_ID).reject(doc.id, "Too late", "reviewer-1")

    async def test_stale_compare_and_set_does_not_apply(self, session, packaging):
        vendor, iso = packaging
        doc = await add_document(session, vendor, iso)
        repo = VendorDocumentRepository(session, ORG_ID)

        first = await repo.update_if(doc.id, {"status": "pending"}, status="approved")
        second = await repo.update_if(doc.id, {"status": "pending"}, status="rejected")

        assert first is True
        assert second is False
        assert (await repo.reload(doc.id)).status == "approved"

    async def test_concurrent_approvals_one_wins(self, session_factory, session, packaging):
        vendor, iso = packaging
        doc = await add_document(session, vendor, iso)

        async def approve_as(reviewer):
            async with session_factory() as s:
                try:
                    await DocumentService(s, ORG_ID).approve(doc.id, reviewer, now=NOW)
                    await s.commit()
                    return "ok"
                except InvalidStateError:
                    await s.rollback()
                    return "invalid_state"

        results = await asyncio.gather(approve_as("reviewer-1"), approve_as("reviewer-2"))

        assert sorted(results) == ["invalid_state", "ok"]
        async with session_factory() as s:
            final = await VendorDocumentRepository(s, ORG_ID).get_by_id(doc.id)
        assert final.status == DocumentStatus.APPROVED.value
        assert final.approved_by in ("reviewer-1", "reviewer-2")

    async def test_review_is_audited(self, session, packaging):
        vendor, iso = packaging
        svc = DocumentService(session, ORG_ID)
        doc = await svc.upload(vendor.id, iso.id, FILE, actor_id="admin-1", now=NOW)
        await svc.approve(doc.id, "reviewer-1", notes="Looks good", now=NOW)
        await session.flush()

        rows = (
            await session.execute(
                select(AuditLog).where(AuditLog.vendor_document_id == doc.id)
            )
        ).scalars().all()
        assert sorted(r.action_type for r in rows) == ["approved", "uploaded"]
        approved = next(r for r in rows if r.action_type == "approved")
        assert approved.details == {"notes": "Looks good"}


class TestListing:
    async def test_status_filter_uses_effective_status(self, session, packaging):
        vendor, iso = packaging
        lapsed = await add_document(
            session, vendor, iso, DocumentStatus.APPROVED, expiry_date=NOW - timedelta(days=1)
        )
        current = await add_document(
            session, vendor, iso, DocumentStatus.APPROVED, expiry_date=NOW + timedelta(days=1)
        )
        svc = DocumentService(session, ORG_ID)

        expired, _ = await svc.list_documents(_page(), status=DocumentStatus.EXPIRED, now=NOW)
        approved, _ = await svc.list_documents(_page(), status=DocumentStatus.APPROVED, now=NOW)

        assert [d.id for d in expired] == [lapsed.id]
        assert [d.id for d in approved] == [current.id]
