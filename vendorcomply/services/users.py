"""Organization members.

The identity provider authenticates people; this service only maps its
subject onto a User row. A subject seen for the first time is created in the
default organization, subject to that organization's user ceiling.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.config import settings
from vendorcomply.core.exceptions import NotFoundError
from vendorcomply.core.pagination import PaginationParams
from vendorcomply.domain.enums import PlanTier, UserRole
from vendorcomply.domain.organization import Organization, User
from vendorcomply.repositories.organization import (
    OrganizationRepository,
    UserRepository,
    find_user_by_subject,
)
from vendorcomply.services.billing import BillingService

logger = logging.getLogger(__name__)


async def ensure_organization(session: AsyncSession, organization_id: str) -> Organization:
    repo = OrganizationRepository(session)
    org = await repo.get_by_id(organization_id)
    if org is None:
        org = await repo.create(
            id=organization_id,
            name=settings.default_organization_name,
            plan=PlanTier.FREE.value,
        )
        logger.info("Created organization %s", organization_id)
    return org


async def upsert_principal(
    session: AsyncSession,
    subject: str,
    *,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Return the User for ``subject``, creating it on first sight."""
    user = await find_user_by_subject(session, subject)
    if user is not None:
        return user

    organization_id = settings.default_organization_id
    await ensure_organization(session, organization_id)
    await BillingService(session, organization_id).ensure_can_add("user")

    repo = UserRepository(session, organization_id)
    # The first member of an organization administers it
    role = UserRole.ADMIN if await repo.count() == 0 else UserRole.READ_ONLY
    user = await repo.create(
        id=subject,
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role.value,
    )
    logger.info("Provisioned user %s in %s as %s", subject, organization_id, role.value)
    return user


class UserService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._repo = UserRepository(session, organization_id)

    async def list_users(self, pagination: PaginationParams):
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

    async def set_role(self, user_id: str, role: UserRole) -> User:
        if not await self._repo.get_by_id(user_id):
            raise NotFoundError("User", user_id)
        return await self._repo.update(user_id, role=role.value)  # type: ignore[return-value]
