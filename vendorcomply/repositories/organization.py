"""Organization and user repositories.

Organizations are the tenancy boundary themselves, so their repository is
not organization-scoped. Users are scoped like everything else, except for
the lookup by identity-provider subject that runs before the tenant is known.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.domain.organization import Organization, User
from vendorcomply.repositories.base import BaseRepository


class OrganizationRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, organization_id: str) -> Organization | None:
        return await self._session.get(Organization, organization_id)

    async def create(self, **kwargs: Any) -> Organization:
        instance = Organization(**kwargs)
        self._session.add(instance)
        await self._session.flush()
        return instance


class UserRepository(BaseRepository[User]):
    model = User


async def find_user_by_subject(session: AsyncSession, subject: str) -> User | None:
    result = await session.execute(select(User).where(User.id == subject))
    return result.scalars().first()
