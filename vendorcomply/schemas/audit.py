from datetime import datetime
from typing import Any

from vendorcomply.schemas.common import CamelModel


class AuditLogOut(CamelModel):
    id: str
    vendor_id: str | None = None
    vendor_document_id: str | None = None
    action_type: str
    actor_id: str | None = None
    actor_type: str
    description: str
    details: dict[str, Any] | None = None
    created_at: datetime
