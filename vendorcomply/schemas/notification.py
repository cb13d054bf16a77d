from datetime import datetime

from pydantic import Field

from vendorcomply.schemas.common import CamelModel


class NotificationRuleCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    is_active: bool = True
    days_before: int = Field(ge=0, le=3650)
    notify_vendor: bool = True
    notify_internal: bool = True
    internal_recipients: list[str] | None = None


class NotificationRuleUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None
    days_before: int | None = Field(default=None, ge=0, le=3650)
    notify_vendor: bool | None = None
    notify_internal: bool | None = None
    internal_recipients: list[str] | None = None


class NotificationRuleOut(CamelModel):
    id: str
    name: str
    is_active: bool
    days_before: int
    notify_vendor: bool
    notify_internal: bool
    internal_recipients: list[str] | None = None
    created_at: datetime
