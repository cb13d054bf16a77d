"""SQLAlchemy ORM model for the compliance audit log."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from vendorcomply.core.clock import utcnow
from vendorcomply.db.base import Base
from vendorcomply.domain.mixins import TenantMixin


class AuditLog(Base, TenantMixin):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Subject
    vendor_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), index=True, nullable=True
    )
    vendor_document_id: Mapped[Optional[str]] = mapped_column(
        String(36), index=True, nullable=True
    )

    # Who: "user" | "vendor" | "system"
    actor_id: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    actor_type: Mapped[str] = mapped_column(String(20), nullable=False)

    # What
    action_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    details: Mapped[Optional[Any]] = mapped_column("metadata", JSON, nullable=True)

    # When (no updated_at — audit rows are immutable)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
