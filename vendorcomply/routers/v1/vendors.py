"""Vendor router — registry CRUD, compliance views and portal link issuance.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject DB session + current user via Depends
  3. Instantiate the service with (session, user.organization_id)
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.core.config import settings
from vendorcomply.core.pagination import PaginationParams
from vendorcomply.core.response import CollectionResponse, DataResponse, ListResponse, paginated
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user, require_editor
from vendorcomply.domain.enums import RiskLevel, VendorStatus
from vendorcomply.domain.organization import User
from vendorcomply.schemas.document import ComplianceOut, RequirementOut, VendorDocumentOut
from vendorcomply.schemas.vendor import (
    PortalTokenOut,
    PortalTokenRequest,
    VendorCreate,
    VendorOut,
    VendorUpdate,
)
from vendorcomply.services.billing import BillingService
from vendorcomply.services.compliance import ComplianceService
from vendorcomply.services.documents import DocumentService
from vendorcomply.services.portal import PortalService
from vendorcomply.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


def _svc(session: AsyncSession, user: User) -> VendorService:
    return VendorService(session, user.organization_id)


# ------------------------------------------------------------------
# CRUD
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[VendorOut])
async def list_vendors(
    category: Optional[str] = Query(default=None),
    filter_status: Optional[VendorStatus] = Query(default=None, alias="status"),
    risk_level: Optional[RiskLevel] = Query(default=None, alias="riskLevel"),
    search: Optional[str] = Query(default=None, description="Matches name or contact email"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List vendors (paginated). Filter by ?category=, ?status=, ?riskLevel=, ?search=."""
    items, total = await _svc(session, user).list_vendors(
        pagination,
        category=category,
        status=filter_status.value if filter_status else None,
        risk_level=risk_level.value if risk_level else None,
        search=search,
    )
    return paginated(
        [VendorOut.model_validate(v) for v in items],
        total, pagination.page, pagination.limit,
    )


@router.post("", response_model=DataResponse[VendorOut], status_code=status.HTTP_201_CREATED)
async def create_vendor(
    body: VendorCreate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    await BillingService(session, user.organization_id).ensure_can_add("vendor")
    vendor = await _svc(session, user).create_vendor(body, actor_id=user.id)
    return {"data": VendorOut.model_validate(vendor)}


@router.get("/{vendor_id}", response_model=DataResponse[VendorOut])
async def get_vendor(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    vendor = await _svc(session, user).get_vendor(vendor_id)
    return {"data": VendorOut.model_validate(vendor)}


@router.patch("/{vendor_id}", response_model=DataResponse[VendorOut])
async def update_vendor(
    vendor_id: str,
    body: VendorUpdate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    vendor = await _svc(session, user).update_vendor(vendor_id, body, actor_id=user.id)
    return {"data": VendorOut.model_validate(vendor)}


@router.delete("/{vendor_id}", response_model=DataResponse[VendorOut])
async def archive_vendor(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    """Archive (status -> inactive). Vendors are never hard-deleted."""
    vendor = await _svc(session, user).archive_vendor(vendor_id, actor_id=user.id)
    return {"data": VendorOut.model_validate(vendor)}


# ------------------------------------------------------------------
# Compliance
# ------------------------------------------------------------------

@router.get("/{vendor_id}/documents", response_model=CollectionResponse[VendorDocumentOut])
async def list_vendor_documents(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    vendor = await _svc(session, user).get_vendor(vendor_id)
    docs = await DocumentService(session, user.organization_id).list_for_vendor(vendor.id)
    now = utcnow()
    return {"data": [VendorDocumentOut.build(d, now) for d in docs]}


@router.get("/{vendor_id}/requirements", response_model=CollectionResponse[RequirementOut])
async def vendor_requirements(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Each required document type with its effective status (including `missing`)."""
    now = utcnow()
    reqs = await ComplianceService(session, user.organization_id).vendor_requirements(
        vendor_id, now
    )
    return {"data": [RequirementOut.build(r, now) for r in reqs]}


@router.get("/{vendor_id}/compliance", response_model=DataResponse[ComplianceOut])
async def vendor_compliance(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    summary = await ComplianceService(session, user.organization_id).vendor_compliance(vendor_id)
    return {"data": ComplianceOut.build(vendor_id, summary)}


# ------------------------------------------------------------------
# Portal link
# ------------------------------------------------------------------

@router.post("/{vendor_id}/portal-token", response_model=DataResponse[PortalTokenOut])
async def issue_portal_token(
    vendor_id: str,
    body: Optional[PortalTokenRequest] = Body(default=None),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    """Issue a new portal link; any previously issued link stops working."""
    issued = await PortalService(session, user.organization_id).issue_token(
        vendor_id,
        body.validity_days if body else None,
        actor_id=user.id,
    )
    return {
        "data": PortalTokenOut(
            token=issued.token,
            expiry=issued.expiry,
            portal_url=f"{settings.portal_base_url.rstrip('/')}/{issued.token}",
        )
    }
