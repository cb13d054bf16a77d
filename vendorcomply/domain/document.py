"""SQLAlchemy ORM models for document requirements and uploaded evidence."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorcomply.db.base import Base
from vendorcomply.domain.enums import DocumentStatus
from vendorcomply.domain.mixins import SoftDeleteMixin, TenantMixin, TimestampMixin


class DocumentType(Base, TenantMixin, TimestampMixin, SoftDeleteMixin):
    """A requirement template: which vendor categories must (or may) supply it."""

    __tablename__ = "document_types"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Never empty; enforced by the schema and the service
    applicable_categories: Mapped[list] = mapped_column(JSON, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expiry_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    default_validity_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def applies_to(self, category: str) -> bool:
        return category in (self.applicable_categories or [])


class VendorDocument(Base, TenantMixin, TimestampMixin):
    """One uploaded artifact for a (vendor, document type) pair.

    ``status`` holds the last stored review state. Expiry is never written
    here by a transition; see ``services.status.effective_status``.
    """

    __tablename__ = "vendor_documents"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    document_type_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("document_types.id"), nullable=False, index=True
    )

    # Stored: pending | approved | rejected (| expired for rows written by older tooling)
    status: Mapped[str] = mapped_column(
        String(20), default=DocumentStatus.PENDING.value, nullable=False, index=True
    )

    # File storage reference
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    file_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    issue_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expiry_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), index=True, nullable=True
    )

    # Upload: user id, or vendor id when uploaded through the portal
    uploaded_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    uploader_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    uploaded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Review
    approved_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    vendor: Mapped["Vendor"] = relationship(back_populates="documents", lazy="noload")
    document_type: Mapped["DocumentType"] = relationship(lazy="noload")
