"""Plan and usage schemas. A limit of -1 means unlimited."""

from datetime import datetime

from vendorcomply.schemas.common import CamelModel


class PlanOut(CamelModel):
    tier: str
    name: str
    price: int
    max_users: int
    max_vendors: int
    max_documents: int
    features: list[str]


class ResourceUsage(CamelModel):
    used: int
    limit: int
    can_add: bool


class UsageOut(CamelModel):
    organization_id: str
    plan: str
    subscription_status: str | None = None
    current_period_end: datetime | None = None
    users: ResourceUsage
    vendors: ResourceUsage
    documents: ResourceUsage
