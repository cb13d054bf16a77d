"""Current user and organization member router."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.pagination import PaginationParams
from vendorcomply.core.response import DataResponse, ListResponse, paginated
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user, require_admin
from vendorcomply.domain.organization import User
from vendorcomply.schemas.user import RoleUpdate, UserOut
from vendorcomply.services.users import UserService

router = APIRouter(tags=["Users"])


@router.get("/auth/user", response_model=DataResponse[UserOut])
async def current_user(user: User = Depends(get_current_user)):
    return {"data": UserOut.model_validate(user)}


@router.get("/users", response_model=ListResponse[UserOut])
async def list_users(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    items, total = await UserService(session, user.organization_id).list_users(pagination)
    return paginated(
        [UserOut.model_validate(u) for u in items],
        total, pagination.page, pagination.limit,
    )


@router.patch("/users/{user_id}/role", response_model=DataResponse[UserOut])
async def update_user_role(
    user_id: str,
    body: RoleUpdate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    updated = await UserService(session, user.organization_id).set_role(user_id, body.role)
    return {"data": UserOut.model_validate(updated)}
