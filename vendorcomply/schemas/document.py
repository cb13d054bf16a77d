"""Document type and vendor document schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from vendorcomply.core.clock import ensure_utc
from vendorcomply.domain.document import VendorDocument
from vendorcomply.domain.enums import DocumentStatus
from vendorcomply.schemas.common import CamelModel
from vendorcomply.services.compliance import ComplianceSummary, RequirementStatus
from vendorcomply.services.status import days_until_expiry, effective_status


def _clean_categories(value: Optional[list[str]]) -> Optional[list[str]]:
    if value is None:
        return None
    cleaned = list(dict.fromkeys(c.strip() for c in value if c and c.strip()))
    if not cleaned:
        raise ValueError("at least one applicable category is required")
    return cleaned


# ---------------------------------------------------------------------------
# Document types
# ---------------------------------------------------------------------------

class DocumentTypeCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    applicable_categories: list[str] = Field(min_length=1)
    is_required: bool = True
    expiry_required: bool = True
    default_validity_days: Optional[int] = Field(default=None, gt=0)

    normalize_categories = field_validator("applicable_categories")(_clean_categories)


class DocumentTypeUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    applicable_categories: Optional[list[str]] = None
    is_required: Optional[bool] = None
    expiry_required: Optional[bool] = None
    default_validity_days: Optional[int] = Field(default=None, gt=0)

    normalize_categories = field_validator("applicable_categories")(_clean_categories)


class DocumentTypeOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    applicable_categories: list[str]
    is_required: bool
    expiry_required: bool
    default_validity_days: Optional[int] = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Vendor documents
# ---------------------------------------------------------------------------

class VendorDocumentOut(CamelModel):
    id: str
    vendor_id: str
    document_type_id: str
    status: str
    effective_status: DocumentStatus
    days_until_expiry: Optional[int] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    issue_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    uploaded_by: Optional[str] = None
    uploader_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, doc: VendorDocument, now: datetime) -> "VendorDocumentOut":
        """Serialize with the effective status as of ``now``."""
        data = {}
        for name in cls.model_fields:
            if hasattr(doc, name):
                value = getattr(doc, name)
                data[name] = ensure_utc(value) if isinstance(value, datetime) else value
        data["effective_status"] = effective_status(doc, now)
        data["days_until_expiry"] = days_until_expiry(doc, now)
        return cls.model_validate(data)


class ApproveRequest(CamelModel):
    notes: Optional[str] = None


class RejectRequest(CamelModel):
    rejection_reason: str = ""


class RequirementOut(CamelModel):
    document_type: DocumentTypeOut
    status: DocumentStatus
    document: Optional[VendorDocumentOut] = None

    @classmethod
    def build(cls, req: RequirementStatus, now: datetime) -> "RequirementOut":
        return cls(
            document_type=DocumentTypeOut.model_validate(req.document_type),
            status=req.status,
            document=VendorDocumentOut.build(req.document, now) if req.document else None,
        )


class ComplianceOut(CamelModel):
    vendor_id: str
    approved_count: int
    total_required: int
    percentage: int

    @classmethod
    def build(cls, vendor_id: str, summary: ComplianceSummary) -> "ComplianceOut":
        return cls(
            vendor_id=vendor_id,
            approved_count=summary.approved_count,
            total_required=summary.total_required,
            percentage=summary.percentage,
        )
