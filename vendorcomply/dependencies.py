"""FastAPI dependencies for the authenticated principal.

Login, sessions and token refresh happen at the identity provider / gateway
in front of this API. The gateway forwards the verified subject in
``X-User-Id`` (and profile claims in ``X-User-Email`` / ``X-User-First-Name``
/ ``X-User-Last-Name``); this module maps it onto a User row.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.exceptions import ForbiddenError, UnauthorizedError
from vendorcomply.db.base import get_db
from vendorcomply.domain.enums import UserRole
from vendorcomply.domain.organization import User
from vendorcomply.services.users import upsert_principal


async def get_current_user(
    session: AsyncSession = Depends(get_db),
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    x_user_email: Optional[str] = Header(None, alias="X-User-Email"),
    x_user_first_name: Optional[str] = Header(None, alias="X-User-First-Name"),
    x_user_last_name: Optional[str] = Header(None, alias="X-User-Last-Name"),
) -> User:
    """Resolve the calling user; 401 when no principal was forwarded."""
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError()
    return await upsert_principal(
        session,
        x_user_id.strip(),
        email=x_user_email,
        first_name=x_user_first_name,
        last_name=x_user_last_name,
    )


def require_role(*roles: UserRole) -> Callable:
    """Dependency factory: allow only users holding one of ``roles``."""
    allowed = {r.value for r in roles}

    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise ForbiddenError(f"Requires role: {', '.join(sorted(allowed))}")
        return user

    return _check


# Anyone but read-only members may change data
require_editor = require_role(
    UserRole.ADMIN, UserRole.COMPLIANCE_MANAGER, UserRole.PROCUREMENT_MANAGER
)
# Reviewing documents is a compliance decision
require_reviewer = require_role(UserRole.ADMIN, UserRole.COMPLIANCE_MANAGER)
require_admin = require_role(UserRole.ADMIN)
