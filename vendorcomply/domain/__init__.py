"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  organization.py  — Organization (tenant + plan tier) and User
  vendor.py        — Vendor, including its single portal token
  document.py      — DocumentType requirements and uploaded VendorDocument rows
  audit.py         — Immutable audit log (never updated or deleted)
  notification.py  — Expiry reminder rules
  enums.py         — String enums stored in the status/role/plan columns
  mixins.py        — Shared TimestampMixin, SoftDeleteMixin, TenantMixin
"""

from vendorcomply.domain.audit import AuditLog
from vendorcomply.domain.document import DocumentType, VendorDocument
from vendorcomply.domain.notification import NotificationRule
from vendorcomply.domain.organization import Organization, User
from vendorcomply.domain.vendor import Vendor

__all__ = [
    "AuditLog",
    "DocumentType",
    "NotificationRule",
    "Organization",
    "User",
    "Vendor",
    "VendorDocument",
]
