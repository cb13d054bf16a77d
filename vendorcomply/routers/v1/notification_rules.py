"""Expiry reminder rule router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.core.response import CollectionResponse, DataResponse
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user, require_editor
from vendorcomply.domain.organization import User
from vendorcomply.schemas.document import VendorDocumentOut
from vendorcomply.schemas.notification import (
    NotificationRuleCreate,
    NotificationRuleOut,
    NotificationRuleUpdate,
)
from vendorcomply.services.notifications import NotificationRuleService

router = APIRouter(prefix="/notification-rules", tags=["Notification Rules"])


def _svc(session: AsyncSession, user: User) -> NotificationRuleService:
    return NotificationRuleService(session, user.organization_id)


@router.get("", response_model=CollectionResponse[NotificationRuleOut])
async def list_rules(
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rules = await _svc(session, user).list_rules()
    return {"data": [NotificationRuleOut.model_validate(r) for r in rules]}


@router.post("", response_model=DataResponse[NotificationRuleOut], status_code=status.HTTP_201_CREATED)
async def create_rule(
    body: NotificationRuleCreate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    rule = await _svc(session, user).create_rule(body)
    return {"data": NotificationRuleOut.model_validate(rule)}


@router.get("/{rule_id}", response_model=DataResponse[NotificationRuleOut])
async def get_rule(
    rule_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rule = await _svc(session, user).get_rule(rule_id)
    return {"data": NotificationRuleOut.model_validate(rule)}


@router.patch("/{rule_id}", response_model=DataResponse[NotificationRuleOut])
async def update_rule(
    rule_id: str,
    body: NotificationRuleUpdate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    rule = await _svc(session, user).update_rule(rule_id, body)
    return {"data": NotificationRuleOut.model_validate(rule)}


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(
    rule_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    await _svc(session, user).delete_rule(rule_id)


@router.get("/{rule_id}/due", response_model=CollectionResponse[VendorDocumentOut])
async def due_reminders(
    rule_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Approved documents this rule would currently remind about."""
    now = utcnow()
    docs = await _svc(session, user).due_reminders(rule_id, now)
    return {"data": [VendorDocumentOut.build(d, now) for d in docs]}
