"""Dashboard statistics router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.core.response import CollectionResponse, DataResponse
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user
from vendorcomply.domain.organization import User
from vendorcomply.schemas.document import VendorDocumentOut
from vendorcomply.schemas.stats import CategoryComplianceOut, DashboardStatsOut
from vendorcomply.services.compliance import ComplianceService

router = APIRouter(prefix="/stats", tags=["Stats"])


def _svc(session: AsyncSession, user: User) -> ComplianceService:
    return ComplianceService(session, user.organization_id)


@router.get("/compliance", response_model=DataResponse[DashboardStatsOut])
async def compliance_stats(
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Organization-wide compliance over active vendors."""
    stats = await _svc(session, user).dashboard_stats()
    return {"data": DashboardStatsOut.model_validate(stats)}


@router.get("/compliance-by-category", response_model=CollectionResponse[CategoryComplianceOut])
async def compliance_by_category(
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = await _svc(session, user).compliance_by_category()
    return {"data": [CategoryComplianceOut.model_validate(r) for r in rows]}


@router.get("/expiring-documents", response_model=CollectionResponse[VendorDocumentOut])
async def expiring_documents(
    days: int | None = Query(default=None, ge=1, le=3650, description="Look-ahead window in days"),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Approved documents whose expiry falls inside the next ``days`` days, soonest first."""
    now = utcnow()
    docs = await _svc(session, user).expiring_documents(days, now)
    return {"data": [VendorDocumentOut.build(d, now) for d in docs]}
