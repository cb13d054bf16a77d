"""Vendor document router — upload and review workflow."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.core.pagination import PaginationParams
from vendorcomply.core.response import DataResponse, ListResponse, paginated
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user, require_editor, require_reviewer
from vendorcomply.domain.enums import DocumentStatus
from vendorcomply.domain.organization import User
from vendorcomply.routers.uploads import store_upload
from vendorcomply.schemas.document import ApproveRequest, RejectRequest, VendorDocumentOut
from vendorcomply.services.billing import BillingService
from vendorcomply.services.documents import DocumentService

router = APIRouter(prefix="/vendor-documents", tags=["Vendor Documents"])


def _svc(session: AsyncSession, user: User) -> DocumentService:
    return DocumentService(session, user.organization_id)


@router.get("", response_model=ListResponse[VendorDocumentOut])
async def list_documents(
    vendor_id: Optional[str] = Query(default=None, alias="vendorId"),
    document_type_id: Optional[str] = Query(default=None, alias="documentTypeId"),
    filter_status: Optional[DocumentStatus] = Query(
        default=None, alias="status", description="Effective status (expired includes lapsed approvals)"
    ),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    now = utcnow()
    items, total = await _svc(session, user).list_documents(
        pagination,
        vendor_id=vendor_id,
        document_type_id=document_type_id,
        status=filter_status,
        now=now,
    )
    return paginated(
        [VendorDocumentOut.build(d, now) for d in items],
        total, pagination.page, pagination.limit,
    )


@router.post(
    "/upload",
    response_model=DataResponse[VendorDocumentOut],
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    file: UploadFile = File(...),
    vendor_id: str = Form(..., alias="vendorId"),
    document_type_id: str = Form(..., alias="documentTypeId"),
    issue_date: Optional[datetime] = Form(default=None, alias="issueDate"),
    expiry_date: Optional[datetime] = Form(default=None, alias="expiryDate"),
    notes: Optional[str] = Form(default=None),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    """Upload a compliance document; it starts out `pending` review."""
    await BillingService(session, user.organization_id).ensure_can_add("document")
    svc = _svc(session, user)
    await svc.check_upload_target(
        vendor_id, document_type_id, issue_date=issue_date, expiry_date=expiry_date
    )
    stored = await store_upload(file, vendor_id)
    doc = await svc.upload(
        vendor_id,
        document_type_id,
        stored,
        issue_date=issue_date,
        expiry_date=expiry_date,
        notes=notes,
        actor_id=user.id,
    )
    return {"data": VendorDocumentOut.build(doc, utcnow())}


@router.get("/{document_id}", response_model=DataResponse[VendorDocumentOut])
async def get_document(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    doc = await _svc(session, user).get_document(document_id)
    return {"data": VendorDocumentOut.build(doc, utcnow())}


@router.post("/{document_id}/approve", response_model=DataResponse[VendorDocumentOut])
async def approve_document(
    document_id: str,
    body: Optional[ApproveRequest] = Body(default=None),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_reviewer),
):
    """Approve a pending document. Anything but `pending` answers 409."""
    doc = await _svc(session, user).approve(
        document_id, user.id, notes=body.notes if body else None
    )
    return {"data": VendorDocumentOut.build(doc, utcnow())}


@router.post("/{document_id}/reject", response_model=DataResponse[VendorDocumentOut])
async def reject_document(
    document_id: str,
    body: RejectRequest,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_reviewer),
):
    """Reject a pending document; `rejectionReason` is mandatory."""
    doc = await _svc(session, user).reject(document_id, body.rejection_reason, user.id)
    return {"data": VendorDocumentOut.build(doc, utcnow())}


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    await _svc(session, user).delete_document(document_id, actor_id=user.id)
