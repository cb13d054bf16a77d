"""SQLAlchemy ORM model for Vendors.

A vendor carries at most one portal token. Issuing a new token overwrites
``portal_token`` and ``portal_token_expiry`` together, which invalidates the
previous link immediately.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorcomply.db.base import Base
from vendorcomply.domain.enums import RiskLevel, VendorStatus
from vendorcomply.domain.mixins import TenantMixin, TimestampMixin


class Vendor(Base, TenantMixin, TimestampMixin):
    __tablename__ = "vendors"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    legal_entity_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Matched against DocumentType.applicable_categories
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # "low" | "medium" | "high"
    risk_level: Mapped[str] = mapped_column(
        String(20), default=RiskLevel.LOW.value, nullable=False
    )
    # "active" | "inactive" | "onboarding"
    status: Mapped[str] = mapped_column(
        String(20), default=VendorStatus.ACTIVE.value, nullable=False, index=True
    )

    primary_contact_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    primary_contact_email: Mapped[Optional[str]] = mapped_column(
        String(255), index=True, nullable=True
    )
    primary_contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tags: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    portal_token: Mapped[Optional[str]] = mapped_column(
        String(128), unique=True, index=True, nullable=True
    )
    portal_token_expiry: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    documents: Mapped[List["VendorDocument"]] = relationship(
        back_populates="vendor", lazy="noload"
    )
