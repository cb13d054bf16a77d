"""Plans and usage router."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.response import CollectionResponse, DataResponse
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user
from vendorcomply.domain.organization import User
from vendorcomply.schemas.billing import PlanOut, ResourceUsage, UsageOut
from vendorcomply.services.billing import PLAN_LIMITS, BillingService, can_add, limits_for

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.get("/plans", response_model=CollectionResponse[PlanOut])
async def list_plans():
    return {
        "data": [
            PlanOut.model_validate({**asdict(plan), "tier": plan.tier.value})
            for plan in PLAN_LIMITS.values()
        ]
    }


@router.get("/usage", response_model=DataResponse[UsageOut])
async def get_usage(
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Current counts against the organization's plan ceilings."""
    svc = BillingService(session, user.organization_id)
    org = await svc.get_organization()
    limits = limits_for(org)
    counts = await svc.usage()

    def _usage(resource: str) -> ResourceUsage:
        limit = limits.limit_for(resource)
        return ResourceUsage(used=counts[resource], limit=limit, can_add=can_add(limit, counts[resource]))

    return {
        "data": UsageOut(
            organization_id=org.id,
            plan=org.plan,
            subscription_status=org.subscription_status,
            current_period_end=org.current_period_end,
            users=_usage("user"),
            vendors=_usage("vendor"),
            documents=_usage("document"),
        )
    }
