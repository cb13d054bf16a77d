"""Vendor portal router — public, authorized only by the token in the path.

Every endpoint resolves the token first and then works strictly inside that
vendor's organization and that vendor's own documents. Unknown and expired
tokens both answer the same 404.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.core.response import CollectionResponse, DataResponse
from vendorcomply.db.base import get_db
from vendorcomply.domain.enums import ActorType
from vendorcomply.domain.vendor import Vendor
from vendorcomply.routers.uploads import store_upload
from vendorcomply.schemas.document import DocumentTypeOut, RequirementOut, VendorDocumentOut
from vendorcomply.schemas.vendor import VendorPortalOut
from vendorcomply.services.billing import BillingService
from vendorcomply.services.compliance import ComplianceService
from vendorcomply.services.document_types import DocumentTypeService
from vendorcomply.services.documents import DocumentService
from vendorcomply.services.portal import require_portal_vendor
from vendorcomply.services.requirements import applicable_document_types

router = APIRouter(prefix="/portal", tags=["Vendor Portal"])


async def portal_vendor(token: str, session: AsyncSession = Depends(get_db)) -> Vendor:
    return await require_portal_vendor(session, token)


@router.get("/{token}", response_model=DataResponse[VendorPortalOut])
async def get_portal_vendor(vendor: Vendor = Depends(portal_vendor)):
    return {"data": VendorPortalOut.model_validate(vendor)}


@router.get("/{token}/documents", response_model=CollectionResponse[VendorDocumentOut])
async def list_portal_documents(
    vendor: Vendor = Depends(portal_vendor),
    session: AsyncSession = Depends(get_db),
):
    docs = await DocumentService(session, vendor.organization_id).list_for_vendor(vendor.id)
    now = utcnow()
    return {"data": [VendorDocumentOut.build(d, now) for d in docs]}


@router.get("/{token}/requirements", response_model=CollectionResponse[RequirementOut])
async def list_portal_requirements(
    vendor: Vendor = Depends(portal_vendor),
    session: AsyncSession = Depends(get_db),
):
    """What this vendor still has to supply, with the status of each requirement."""
    now = utcnow()
    reqs = await ComplianceService(session, vendor.organization_id).vendor_requirements(vendor, now)
    return {"data": [RequirementOut.build(r, now) for r in reqs]}


@router.get("/{token}/document-types", response_model=CollectionResponse[DocumentTypeOut])
async def list_portal_document_types(
    vendor: Vendor = Depends(portal_vendor),
    session: AsyncSession = Depends(get_db),
):
    """Required and optional types this vendor may upload."""
    all_types = await DocumentTypeService(session, vendor.organization_id).list_document_types()
    return {
        "data": [
            DocumentTypeOut.model_validate(t)
            for t in applicable_document_types(vendor.category, all_types)
        ]
    }


@router.post(
    "/{token}/documents",
    response_model=DataResponse[VendorDocumentOut],
    status_code=status.HTTP_201_CREATED,
)
async def upload_portal_document(
    file: UploadFile = File(...),
    document_type_id: str = Form(..., alias="documentTypeId"),
    issue_date: Optional[datetime] = Form(default=None, alias="issueDate"),
    expiry_date: Optional[datetime] = Form(default=None, alias="expiryDate"),
    notes: Optional[str] = Form(default=None),
    vendor: Vendor = Depends(portal_vendor),
    session: AsyncSession = Depends(get_db),
):
    """Self-service upload. The vendor is taken from the token, never from the request."""
    await BillingService(session, vendor.organization_id).ensure_can_add("document")
    svc = DocumentService(session, vendor.organization_id)
    await svc.check_upload_target(
        vendor.id, document_type_id, issue_date=issue_date, expiry_date=expiry_date
    )
    stored = await store_upload(file, vendor.id)
    doc = await svc.upload(
        vendor.id,
        document_type_id,
        stored,
        issue_date=issue_date,
        expiry_date=expiry_date,
        notes=notes,
        actor_id=vendor.id,
        actor_type=ActorType.VENDOR,
    )
    return {"data": VendorDocumentOut.build(doc, utcnow())}
