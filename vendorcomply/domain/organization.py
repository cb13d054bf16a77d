"""SQLAlchemy ORM models for the tenancy boundary: organizations and their users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from vendorcomply.db.base import Base
from vendorcomply.domain.enums import PlanTier, UserRole
from vendorcomply.domain.mixins import TenantMixin, TimestampMixin


class Organization(Base, TimestampMixin):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # "free" | "pro" | "pro_plus"
    plan: Mapped[str] = mapped_column(String(20), default=PlanTier.FREE.value, nullable=False)

    # Payment processor references (written by the external billing integration)
    stripe_customer_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    stripe_subscription_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    subscription_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    current_period_end: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class User(Base, TenantMixin, TimestampMixin):
    """A member of an organization. ``id`` is the identity provider's subject."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # "admin" | "compliance_manager" | "procurement_manager" | "read_only"
    role: Mapped[str] = mapped_column(
        String(50), default=UserRole.READ_ONLY.value, nullable=False
    )
