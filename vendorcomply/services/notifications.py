"""Expiry reminder rules.

Delivering reminders (email etc.) is done elsewhere; this service stores the
rules and answers which approved documents a rule currently applies to.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.core.exceptions import NotFoundError
from vendorcomply.domain.document import VendorDocument
from vendorcomply.domain.notification import NotificationRule
from vendorcomply.repositories.document import VendorDocumentRepository
from vendorcomply.repositories.notification import NotificationRuleRepository
from vendorcomply.schemas.notification import NotificationRuleCreate, NotificationRuleUpdate


class NotificationRuleService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._repo = NotificationRuleRepository(session, organization_id)
        self._docs = VendorDocumentRepository(session, organization_id)

    async def list_rules(self) -> list[NotificationRule]:
        return await self._repo.list_all(order_by="days_before")

    async def get_rule(self, rule_id: str) -> NotificationRule:
        rule = await self._repo.get_by_id(rule_id)
        if not rule:
            raise NotFoundError("NotificationRule", rule_id)
        return rule

    async def create_rule(self, data: NotificationRuleCreate) -> NotificationRule:
        return await self._repo.create(**data.model_dump(exclude_none=True))

    async def update_rule(self, rule_id: str, data: NotificationRuleUpdate) -> NotificationRule:
        _ = await self.get_rule(rule_id)
        updated = await self._repo.update(
            rule_id, **data.model_dump(exclude_none=True, exclude_unset=True)
        )
        return updated  # type: ignore[return-value]

    async def delete_rule(self, rule_id: str) -> None:
        deleted = await self._repo.hard_delete(rule_id)
        if not deleted:
            raise NotFoundError("NotificationRule", rule_id)

    async def due_reminders(
        self, rule_id: str, now: datetime | None = None
    ) -> list[VendorDocument]:
        """Approved documents expiring within the rule's window. Inactive rules match nothing."""
        rule = await self.get_rule(rule_id)
        if not rule.is_active:
            return []
        now = now or utcnow()
        return await self._docs.list_approved_expiring(now, now + timedelta(days=rule.days_before))
