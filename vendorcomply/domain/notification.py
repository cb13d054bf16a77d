"""SQLAlchemy ORM model for expiry reminder rules."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vendorcomply.db.base import Base
from vendorcomply.domain.mixins import TenantMixin, TimestampMixin


class NotificationRule(Base, TenantMixin, TimestampMixin):
    __tablename__ = "notification_rules"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # Remind this many days ahead of a document's expiry date
    days_before: Mapped[int] = mapped_column(Integer, nullable=False)
    notify_vendor: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notify_internal: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    internal_recipients: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
