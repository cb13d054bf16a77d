"""Compliance aggregation.

Pure functions turn (required types, documents, now) into per-vendor
compliance; ``ComplianceService`` loads the rows and rolls vendors up into
category and organization figures for the dashboard.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.clock import end_of_month, utcnow
from vendorcomply.core.config import settings
from vendorcomply.core.exceptions import NotFoundError
from vendorcomply.domain.document import DocumentType, VendorDocument
from vendorcomply.domain.enums import DocumentStatus, RiskLevel, VendorStatus
from vendorcomply.domain.vendor import Vendor
from vendorcomply.repositories.document import (
    DocumentTypeRepository,
    VendorDocumentRepository,
)
from vendorcomply.repositories.vendor import VendorRepository
from vendorcomply.services.requirements import resolve_required_document_types
from vendorcomply.services.status import best_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComplianceSummary:
    approved_count: int
    total_required: int
    percentage: int


@dataclass(frozen=True)
class RequirementStatus:
    """One required document type and how the vendor currently stands on it."""

    document_type: DocumentType
    status: DocumentStatus
    document: Optional[VendorDocument]


@dataclass(frozen=True)
class CategoryCompliance:
    category: str
    vendor_count: int
    percentage: int


@dataclass(frozen=True)
class DashboardStats:
    overall_compliance: int
    vendors_at_risk: int
    expiring_this_month: int
    total_vendors: int


def percent_half_up(numerator: int, denominator: int) -> int:
    """``round(100 * numerator / denominator)`` with halves rounded up, in exact integer math."""
    return (200 * numerator + denominator) // (2 * denominator)


def mean_half_up(values: Sequence[int]) -> int:
    return (2 * sum(values) + len(values)) // (2 * len(values))


def requirement_statuses(
    required_types: Iterable[DocumentType],
    documents: Iterable[VendorDocument],
    now: datetime,
) -> list[RequirementStatus]:
    by_type: dict[str, list[VendorDocument]] = defaultdict(list)
    for doc in documents:
        by_type[doc.document_type_id].append(doc)

    statuses = []
    for doc_type in required_types:
        doc, status = best_document(by_type.get(doc_type.id, []), now)
        statuses.append(RequirementStatus(document_type=doc_type, status=status, document=doc))
    return statuses


def compute_vendor_compliance(
    required_types: Iterable[DocumentType],
    documents: Iterable[VendorDocument],
    now: datetime,
) -> ComplianceSummary:
    """Share of required document types backed by a currently approved document.

    Only ``required_types`` count toward the denominator, so optional uploads
    neither raise nor lower the figure. No requirements means 100%.
    """
    statuses = requirement_statuses(required_types, documents, now)
    total = len(statuses)
    approved = sum(1 for s in statuses if s.status is DocumentStatus.APPROVED)
    percentage = 100 if total == 0 else percent_half_up(approved, total)
    return ComplianceSummary(approved_count=approved, total_required=total, percentage=percentage)


def rollup_by_category(
    vendors: Iterable[Vendor], percentages: dict[str, int]
) -> list[CategoryCompliance]:
    grouped: dict[str, list[int]] = defaultdict(list)
    for vendor in vendors:
        grouped[vendor.category].append(percentages[vendor.id])
    return [
        CategoryCompliance(category=cat, vendor_count=len(values), percentage=mean_half_up(values))
        for cat, values in sorted(grouped.items())
    ]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ComplianceService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._vendors = VendorRepository(session, organization_id)
        self._types = DocumentTypeRepository(session, organization_id)
        self._docs = VendorDocumentRepository(session, organization_id)

    async def _vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._vendors.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def required_types_for(self, category: str) -> list[DocumentType]:
        return resolve_required_document_types(category, await self._types.list_by_name())

    async def vendor_requirements(
        self, vendor: Vendor | str, now: datetime | None = None
    ) -> list[RequirementStatus]:
        if isinstance(vendor, str):
            vendor = await self._vendor(vendor)
        now = now or utcnow()
        required = await self.required_types_for(vendor.category)
        documents = await self._docs.list_for_vendor(vendor.id)
        return requirement_statuses(required, documents, now)

    async def vendor_compliance(
        self, vendor: Vendor | str, now: datetime | None = None
    ) -> ComplianceSummary:
        if isinstance(vendor, str):
            vendor = await self._vendor(vendor)
        now = now or utcnow()
        required = await self.required_types_for(vendor.category)
        documents = await self._docs.list_for_vendor(vendor.id)
        return compute_vendor_compliance(required, documents, now)

    async def _active_vendor_percentages(
        self, now: datetime
    ) -> tuple[list[Vendor], dict[str, int]]:
        vendors = await self._vendors.list_all(filters={"status": VendorStatus.ACTIVE.value})
        all_types = await self._types.list_by_name()
        documents = await self._docs.list_for_vendors([v.id for v in vendors])

        docs_by_vendor: dict[str, list[VendorDocument]] = defaultdict(list)
        for doc in documents:
            docs_by_vendor[doc.vendor_id].append(doc)

        percentages = {
            v.id: compute_vendor_compliance(
                resolve_required_document_types(v.category, all_types),
                docs_by_vendor[v.id],
                now,
            ).percentage
            for v in vendors
        }
        return vendors, percentages

    async def compliance_by_category(self, now: datetime | None = None) -> list[CategoryCompliance]:
        vendors, percentages = await self._active_vendor_percentages(now or utcnow())
        return rollup_by_category(vendors, percentages)

    async def dashboard_stats(self, now: datetime | None = None) -> DashboardStats:
        now = now or utcnow()
        vendors, percentages = await self._active_vendor_percentages(now)
        overall = mean_half_up(list(percentages.values())) if percentages else 100
        threshold = settings.at_risk_compliance_threshold
        at_risk = sum(
            1 for v in vendors
            if v.risk_level == RiskLevel.HIGH.value or percentages[v.id] < threshold
        )
        expiring = await self._docs.list_approved_expiring(now, end_of_month(now))
        logger.debug(
            "Dashboard stats: %d active vendors, overall %d%%, %d at risk",
            len(vendors), overall, at_risk,
        )
        return DashboardStats(
            overall_compliance=overall,
            vendors_at_risk=at_risk,
            expiring_this_month=len(expiring),
            total_vendors=len(vendors),
        )

    async def expiring_documents(
        self, days: int | None = None, now: datetime | None = None
    ) -> list[VendorDocument]:
        now = now or utcnow()
        window = days if days is not None else settings.expiring_window_days
        return await self._docs.list_approved_expiring(now, now + timedelta(days=window))
