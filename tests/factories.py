"""Row builders for tests. Each commits so the API sees the data."""

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.config import settings
from vendorcomply.domain.document import DocumentType, VendorDocument
from vendorcomply.domain.enums import DocumentStatus
from vendorcomply.domain.organization import User
from vendorcomply.domain.vendor import Vendor

ORG_ID = settings.default_organization_id
ADMIN_HEADERS = {"X-User-Id": "admin-1", "X-User-Email": "admin@example.com"}

# Fixed reference instant for service-level tests
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


async def add_user(session: AsyncSession, user_id: str, role: str) -> User:
    user = User(id=user_id, organization_id=ORG_ID, role=role)
    session.add(user)
    await session.commit()
    return user


async def add_vendor(session: AsyncSession, name: str, category: str, **kwargs) -> Vendor:
    vendor = Vendor(organization_id=ORG_ID, name=name, category=category, **kwargs)
    session.add(vendor)
    await session.commit()
    return vendor


async def add_document_type(
    session: AsyncSession,
    name: str,
    categories: list[str],
    *,
    is_required: bool = True,
    expiry_required: bool = False,
    default_validity_days: int | None = None,
) -> DocumentType:
    doc_type = DocumentType(
        organization_id=ORG_ID,
        name=name,
        applicable_categories=categories,
        is_required=is_required,
        expiry_required=expiry_required,
        default_validity_days=default_validity_days,
    )
    session.add(doc_type)
    await session.commit()
    return doc_type


async def add_document(
    session: AsyncSession,
    vendor: Vendor,
    doc_type: DocumentType,
    status: DocumentStatus = DocumentStatus.PENDING,
    *,
    expiry_date: datetime | None = None,
    uploaded_at: datetime | None = None,
) -> VendorDocument:
    doc = VendorDocument(
        organization_id=ORG_ID,
        vendor_id=vendor.id,
        document_type_id=doc_type.id,
        status=status.value,
        file_name="cert.pdf",
        expiry_date=expiry_date,
        uploaded_at=uploaded_at or NOW,
    )
    session.add(doc)
    await session.commit()
    return doc
