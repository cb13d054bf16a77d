"""Generic async repository with soft-delete, pagination, and tenant isolation."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import utcnow
from vendorcomply.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository. All queries are filtered by organization_id.

    Soft-deletes: for models with a `deleted_at` column, rows where it is set
    are excluded from all standard reads.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession, organization_id: str):
        self._session = session
        self._organization_id = organization_id

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        """Return a SELECT filtered by organization_id and excluding soft-deleted rows."""
        q = select(self.model).where(self.model.organization_id == self._organization_id)
        if hasattr(self.model, "deleted_at"):
            q = q.where(self.model.deleted_at.is_(None))
        return q

    def _scoped_update(self, entity_id: str):
        return (
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.organization_id == self._organization_id)
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
        filters: dict[str, Any] | None = None,
        conditions: list | None = None,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) with pagination, column filters and extra clauses."""
        q = self._apply_filters(self._base_query(), filters, conditions)

        # Count
        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        # Order + paginate
        col = getattr(self.model, order_by, None)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        q = q.offset(offset).limit(limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    async def list_all(
        self,
        *,
        filters: dict[str, Any] | None = None,
        conditions: list | None = None,
        order_by: str = "created_at",
    ) -> list[ModelT]:
        """Unpaginated read, for aggregation over an organization's rows."""
        q = self._apply_filters(self._base_query(), filters, conditions)
        col = getattr(self.model, order_by, None)
        if col is not None:
            q = q.order_by(col.asc())
        return list((await self._session.execute(q)).scalars().all())

    async def count(self, filters: dict[str, Any] | None = None) -> int:
        q = self._apply_filters(self._base_query(), filters, None)
        count_q = select(func.count()).select_from(q.subquery())
        return (await self._session.execute(count_q)).scalar_one()

    def _apply_filters(self, q, filters: dict[str, Any] | None, conditions: list | None):
        # Simple equality filters; None values mean "not filtered"
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)
        for clause in conditions or []:
            q = q.where(clause)
        return q

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(organization_id=self._organization_id, **kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        kwargs.pop("organization_id", None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = utcnow()

        await self._session.execute(
            self._scoped_update(entity_id).values(**kwargs)
        )
        await self._session.flush()
        return await self.reload(entity_id)

    async def update_if(self, entity_id: str, expected: dict[str, Any], **kwargs: Any) -> bool:
        """Compare-and-set: write ``kwargs`` only while every column in ``expected`` still matches.

        Runs as one UPDATE statement; returns False when no row matched.
        """
        if hasattr(self.model, "updated_at"):
            kwargs.setdefault("updated_at", utcnow())
        stmt = self._scoped_update(entity_id)
        for col_name, value in expected.items():
            stmt = stmt.where(getattr(self.model, col_name) == value)
        result = await self._session.execute(stmt.values(**kwargs))
        await self._session.flush()
        return result.rowcount > 0

    async def soft_delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            self._scoped_update(entity_id).values(deleted_at=utcnow())
        )
        await self._session.flush()
        return result.rowcount > 0

    async def hard_delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            delete(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.organization_id == self._organization_id)
        )
        await self._session.flush()
        return result.rowcount > 0

    async def reload(self, entity_id: str) -> ModelT | None:
        # Bulk UPDATEs bypass the identity map; reload so callers see the new values
        instance = await self.get_by_id(entity_id)
        if instance is not None:
            await self._session.refresh(instance)
        return instance
