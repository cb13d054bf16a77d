"""Plan tiers and usage ceilings.

Checkout and subscription webhooks belong to the payment processor
integration; this module only answers "may this organization add another
user / vendor / document?" before the API creates one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.exceptions import NotFoundError, PlanLimitError
from vendorcomply.domain.enums import PlanTier
from vendorcomply.domain.organization import Organization
from vendorcomply.repositories.document import VendorDocumentRepository
from vendorcomply.repositories.organization import OrganizationRepository, UserRepository
from vendorcomply.repositories.vendor import VendorRepository

logger = logging.getLogger(__name__)

UNLIMITED = -1


@dataclass(frozen=True)
class PlanLimits:
    tier: PlanTier
    name: str
    price: int  # USD per month
    max_users: int
    max_vendors: int
    max_documents: int
    features: list[str] = field(default_factory=list)

    def limit_for(self, resource: str) -> int:
        return getattr(self, f"max_{resource}s")


PLAN_LIMITS: dict[PlanTier, PlanLimits] = {
    PlanTier.FREE: PlanLimits(
        tier=PlanTier.FREE,
        name="Free",
        price=0,
        max_users=1,
        max_vendors=10,
        max_documents=50,
        features=["Up to 10 vendors", "50 documents", "Vendor portal links"],
    ),
    PlanTier.PRO: PlanLimits(
        tier=PlanTier.PRO,
        name="Pro",
        price=49,
        max_users=5,
        max_vendors=100,
        max_documents=1000,
        features=["Up to 100 vendors", "1,000 documents", "5 team members", "Expiry reminders"],
    ),
    PlanTier.PRO_PLUS: PlanLimits(
        tier=PlanTier.PRO_PLUS,
        name="Pro Plus",
        price=149,
        max_users=UNLIMITED,
        max_vendors=UNLIMITED,
        max_documents=UNLIMITED,
        features=["Unlimited vendors", "Unlimited documents", "Unlimited team members"],
    ),
}

RESOURCES = ("user", "vendor", "document")


def can_add(limit: int, current_count: int) -> bool:
    return limit == UNLIMITED or current_count < limit


def limits_for(organization: Organization) -> PlanLimits:
    return PLAN_LIMITS[PlanTier(organization.plan)]


class BillingService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._organization_id = organization_id
        self._orgs = OrganizationRepository(session)
        self._counters = {
            "user": UserRepository(session, organization_id),
            "vendor": VendorRepository(session, organization_id),
            "document": VendorDocumentRepository(session, organization_id),
        }

    async def get_organization(self) -> Organization:
        org = await self._orgs.get_by_id(self._organization_id)
        if not org:
            raise NotFoundError("Organization", self._organization_id)
        return org

    async def usage(self) -> dict[str, int]:
        return {res: await repo.count() for res, repo in self._counters.items()}

    async def ensure_can_add(self, resource: str) -> None:
        """Raise PlanLimitError when the organization is already at its ceiling."""
        limits = limits_for(await self.get_organization())
        limit = limits.limit_for(resource)
        if limit == UNLIMITED:
            return
        current = await self._counters[resource].count()
        if not can_add(limit, current):
            logger.info(
                "Plan limit hit for %s: %s %d/%d on %s",
                self._organization_id, resource, current, limit, limits.tier.value,
            )
            raise PlanLimitError(resource, limit)
