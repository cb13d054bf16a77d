"""Effective status, requirement resolution and compliance math (no database)."""

from datetime import datetime, timedelta, timezone

import pytest

from vendorcomply.core.exceptions import ValidationError
from vendorcomply.domain.document import DocumentType, VendorDocument
from vendorcomply.domain.enums import DocumentStatus
from vendorcomply.services.compliance import (
    compute_vendor_compliance,
    mean_half_up,
    percent_half_up,
)
from vendorcomply.services.documents import resolve_expiry
from vendorcomply.services.requirements import (
    applicable_document_types,
    resolve_required_document_types,
)
from vendorcomply.services.status import best_document, days_until_expiry, effective_status

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def _type(type_id, name, categories, *, required=True, expiry_required=False, validity=None):
    return DocumentType(
        id=type_id,
        name=name,
        applicable_categories=categories,
        is_required=required,
        expiry_required=expiry_required,
        default_validity_days=validity,
    )


def _doc(type_id, status, *, expiry=None, uploaded=NOW):
    return VendorDocument(
        document_type_id=type_id,
        status=status.value,
        expiry_date=expiry,
        uploaded_at=uploaded,
    )


ISO = _type("t-iso", "ISO 9001", ["Packaging"])
INSURANCE = _type("t-ins", "Insurance Certificate", ["Packaging", "Logistics"], required=False)
W9 = _type("t-w9", "W-9", ["Packaging"])


# =============================================================================
# Requirement resolution
# =============================================================================


class TestRequirementResolution:
    def test_required_types_for_category(self):
        assert [t.name for t in resolve_required_document_types("Packaging", [W9, ISO, INSURANCE])] == [
            "ISO 9001",
            "W-9",
        ]

    def test_optional_types_never_required(self):
        assert resolve_required_document_types("Logistics", [ISO, INSURANCE, W9]) == []

    def test_category_match_is_exact(self):
        assert resolve_required_document_types("packaging", [ISO]) == []

    def test_applicable_includes_optional(self):
        names = [t.name for t in applicable_document_types("Logistics", [ISO, INSURANCE])]
        assert names == ["Insurance Certificate"]


# =============================================================================
# Effective status
# =============================================================================


class TestEffectiveStatus:
    def test_no_document_is_missing(self):
        assert effective_status(None, NOW) is DocumentStatus.MISSING

    def test_approved_past_expiry_is_expired(self):
        doc = _doc("t-iso", DocumentStatus.APPROVED, expiry=NOW - timedelta(seconds=1))
        assert effective_status(doc, NOW) is DocumentStatus.EXPIRED
        # the stored value is untouched
        assert doc.status == "approved"

    def test_approved_expiring_exactly_now_still_approved(self):
        doc = _doc("t-iso", DocumentStatus.APPROVED, expiry=NOW)
        assert effective_status(doc, NOW) is DocumentStatus.APPROVED

    def test_pending_past_expiry_stays_pending(self):
        doc = _doc("t-iso", DocumentStatus.PENDING, expiry=NOW - timedelta(days=3))
        assert effective_status(doc, NOW) is DocumentStatus.PENDING

    def test_naive_expiry_read_as_utc(self):
        doc = _doc("t-iso", DocumentStatus.APPROVED, expiry=datetime(2026, 6, 15, 11, 0))
        assert effective_status(doc, NOW) is DocumentStatus.EXPIRED

    def test_best_document_prefers_approved(self):
        rejected = _doc("t-iso", DocumentStatus.REJECTED, uploaded=NOW)
        approved = _doc("t-iso", DocumentStatus.APPROVED, uploaded=NOW - timedelta(days=10))
        doc, status = best_document([rejected, approved], NOW)
        assert doc is approved
        assert status is DocumentStatus.APPROVED

    def test_best_document_tie_goes_to_latest_upload(self):
        older = _doc("t-iso", DocumentStatus.PENDING, uploaded=NOW - timedelta(days=2))
        newer = _doc("t-iso", DocumentStatus.PENDING, uploaded=NOW - timedelta(days=1))
        doc, _ = best_document([older, newer], NOW)
        assert doc is newer

    def test_days_until_expiry(self):
        doc = _doc("t-iso", DocumentStatus.APPROVED, expiry=NOW + timedelta(days=10, hours=1))
        assert days_until_expiry(doc, NOW) == 11
        assert days_until_expiry(_doc("t-iso", DocumentStatus.APPROVED), NOW) is None


# =============================================================================
# Compliance percentage
# =============================================================================


class TestVendorCompliance:
    def test_no_documents_is_zero_percent(self):
        summary = compute_vendor_compliance([ISO], [], NOW)
        assert (summary.approved_count, summary.total_required, summary.percentage) == (0, 1, 0)

    def test_no_requirements_is_fully_compliant(self):
        summary = compute_vendor_compliance([], [], NOW)
        assert summary.total_required == 0
        assert summary.percentage == 100

    def test_only_currently_approved_counts(self):
        docs = [
            _doc("t-iso", DocumentStatus.APPROVED, expiry=NOW + timedelta(days=30)),
            _doc("t-w9", DocumentStatus.APPROVED, expiry=NOW - timedelta(days=1)),
        ]
        summary = compute_vendor_compliance([ISO, W9], docs, NOW)
        assert summary.approved_count == 1
        assert summary.percentage == 50

    def test_optional_documents_do_not_count(self):
        docs = [_doc("t-ins", DocumentStatus.APPROVED)]
        summary = compute_vendor_compliance([ISO], docs, NOW)
        assert summary.approved_count == 0
        assert summary.total_required == 1

    @pytest.mark.parametrize(
        "approved,total,expected",
        [(1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 2, 50), (0, 5, 0), (5, 5, 100)],
    )
    def test_percent_rounds_half_up(self, approved, total, expected):
        assert percent_half_up(approved, total) == expected

    def test_mean_rounds_half_up(self):
        assert mean_half_up([50, 51]) == 51
        assert mean_half_up([0, 33, 100]) == 44


# =============================================================================
# Expiry on upload
# =============================================================================


class TestResolveExpiry:
    def test_explicit_expiry_wins(self):
        doc_type = _type("t", "Permit", ["X"], validity=365)
        explicit = NOW + timedelta(days=10)
        assert resolve_expiry(doc_type, None, explicit, NOW) == explicit

    def test_default_validity_runs_from_issue_date(self):
        doc_type = _type("t", "Permit", ["X"], validity=365)
        issued = NOW - timedelta(days=5)
        assert resolve_expiry(doc_type, issued, None, NOW) == issued + timedelta(days=365)

    def test_default_validity_runs_from_now_without_issue_date(self):
        doc_type = _type("t", "Permit", ["X"], validity=30)
        assert resolve_expiry(doc_type, None, None, NOW) == NOW + timedelta(days=30)

    def test_required_expiry_missing(self):
        doc_type = _type("t", "Permit", ["X"], expiry_required=True)
        with pytest.raises(ValidationError) as exc:
            resolve_expiry(doc_type, None, None, NOW)
        assert exc.value.field == "expiryDate"

    def test_expiry_before_issue_rejected(self):
        doc_type = _type("t", "Permit", ["X"])
        with pytest.raises(ValidationError):
            resolve_expiry(doc_type, NOW, NOW - timedelta(days=1), NOW)
