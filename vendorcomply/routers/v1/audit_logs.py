"""Audit log router (read-only)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.pagination import PaginationParams
from vendorcomply.core.response import ListResponse, paginated
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user
from vendorcomply.domain.organization import User
from vendorcomply.schemas.audit import AuditLogOut
from vendorcomply.services.audit import AuditService

router = APIRouter(prefix="/audit-logs", tags=["Audit Logs"])


@router.get("", response_model=ListResponse[AuditLogOut])
async def list_audit_logs(
    vendor_id: Optional[str] = Query(default=None, alias="vendorId"),
    vendor_document_id: Optional[str] = Query(default=None, alias="vendorDocumentId"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Newest first by default. Filter by ?vendorId= or ?vendorDocumentId=."""
    items, total = await AuditService(session, user.organization_id).list_logs(
        pagination, vendor_id=vendor_id, vendor_document_id=vendor_document_id
    )
    return paginated(
        [AuditLogOut.model_validate(a) for a in items],
        total, pagination.page, pagination.limit,
    )
