from datetime import datetime

from vendorcomply.domain.enums import UserRole
from vendorcomply.schemas.common import CamelModel


class UserOut(CamelModel):
    id: str
    organization_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: str
    created_at: datetime


class RoleUpdate(CamelModel):
    role: UserRole
