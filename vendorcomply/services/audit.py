"""Audit sink — every mutating compliance operation records one row here.

Rows are staged on the caller's session and commit (or roll back) together
with the change they describe. Callers never read the result.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.pagination import PaginationParams
from vendorcomply.domain.audit import AuditLog
from vendorcomply.domain.enums import ActionType, ActorType
from vendorcomply.repositories.audit import AuditLogRepository

logger = logging.getLogger(__name__)


class AuditService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._repo = AuditLogRepository(session, organization_id)

    def record(
        self,
        action: ActionType,
        description: str,
        *,
        actor_id: str | None = None,
        actor_type: ActorType = ActorType.USER,
        vendor_id: str | None = None,
        vendor_document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self._repo.append(
            action_type=action.value,
            description=description,
            actor_id=actor_id,
            actor_type=actor_type.value,
            vendor_id=vendor_id,
            vendor_document_id=vendor_document_id,
            details=details,
        )
        logger.info(
            "audit %s by %s:%s vendor=%s document=%s",
            action.value, actor_type.value, actor_id, vendor_id, vendor_document_id,
        )

    async def list_logs(
        self,
        pagination: PaginationParams,
        vendor_id: str | None = None,
        vendor_document_id: str | None = None,
    ) -> tuple[list[AuditLog], int]:
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by="created_at",
            order=pagination.order,
            filters={"vendor_id": vendor_id, "vendor_document_id": vendor_document_id},
        )
