"""Vendor Pydantic schemas (request DTOs and response models).

Portal token fields are deliberately absent from VendorCreate / VendorUpdate:
tokens are only ever issued through the portal-token endpoint.
"""


from datetime import datetime

from pydantic import Field, field_validator

from vendorcomply.domain.enums import RiskLevel, VendorStatus
from vendorcomply.schemas.common import CamelModel

class VendorCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    legal_entity_name: str | None = None
    category: str = Field(min_length=1, max_length=100)
    risk_level: RiskLevel = RiskLevel.LOW
    status: VendorStatus = VendorStatus.ACTIVE
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    primary_contact_phone: str | None = None
    tags: list[str] | None = None
    notes: str | None = None

    @field_validator("name", "category")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

class VendorUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    legal_entity_name: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    risk_level: RiskLevel | None = None
    status: VendorStatus | None = None
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    primary_contact_phone: str | None = None
    tags: list[str] | None = None
    notes: str | None = None

class VendorOut(CamelModel):
    id: str
    organization_id: str
    name: str
    legal_entity_name: str | None = None
    category: str
    risk_level: str
    status: str
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    primary_contact_phone: str | None = None
    tags: list[str] | None = None
    notes: str | None = None
    portal_token_expiry: datetime | None = None
    created_at: datetime
    updated_at: datetime

class VendorPortalOut(CamelModel):
    """What an external supplier sees about itself through a portal link."""

    id: str
    name: str
    legal_entity_name: str | None = None
    category: str
    status: str
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    primary_contact_phone: str | None = None
    portal_token_expiry: datetime | None = None

class PortalTokenRequest(CamelModel):
    validity_days: int | None = Field(default=None, ge=1, le=365)

class PortalTokenOut(CamelModel):
    token: str
    expiry: datetime
    portal_url: str
