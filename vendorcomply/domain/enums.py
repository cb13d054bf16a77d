"""String enums stored in plain String columns."""

from __future__ import annotations

import enum


class DocumentStatus(str, enum.Enum):
    # MISSING is derived (required type with no row); it is never stored.
    MISSING = "missing"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class VendorStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ONBOARDING = "onboarding"


class RiskLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PlanTier(str, enum.Enum):
    FREE = "free"
    PRO = "pro"
    PRO_PLUS = "pro_plus"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    COMPLIANCE_MANAGER = "compliance_manager"
    PROCUREMENT_MANAGER = "procurement_manager"
    READ_ONLY = "read_only"


class ActorType(str, enum.Enum):
    USER = "user"
    VENDOR = "vendor"
    SYSTEM = "system"


class ActionType(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    ARCHIVED = "archived"
    DELETED = "deleted"
    UPLOADED = "uploaded"
    APPROVED = "approved"
    REJECTED = "rejected"
    TOKEN_ISSUED = "token_issued"
    STATUS_CHANGE = "status_change"
    REMINDER_SENT = "reminder_sent"
