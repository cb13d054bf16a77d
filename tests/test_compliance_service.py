"""Dashboard aggregation and expiry windows over several vendors."""

from datetime import timedelta

import pytest

from vendorcomply.domain.enums import DocumentStatus, RiskLevel, VendorStatus
from vendorcomply.schemas.notification import NotificationRuleCreate
from vendorcomply.services.compliance import ComplianceService
from vendorcomply.services.notifications import NotificationRuleService
from tests.factories import NOW, ORG_ID, add_document, add_document_type, add_vendor


@pytest.fixture
async def portfolio(session):
    """Packaging needs ISO 9001 and W-9; Logistics needs nothing.

    BoxCo     Packaging  both approved (ISO expires in 10 days)   100%
    CrateCo   Packaging  nothing uploaded                           0%
    FreightCo Logistics  high risk, no requirements               100%
    OldBox    Packaging  archived, ignored
    """
    iso = await add_document_type(session, "ISO 9001", ["Packaging"])
    w9 = await add_document_type(session, "W-9", ["Packaging"])

    boxco = await add_vendor(session, "BoxCo", "Packaging")
    await add_vendor(session, "CrateCo", "Packaging")
    await add_vendor(session, "FreightCo", "Logistics", risk_level=RiskLevel.HIGH.value)
    await add_vendor(session, "OldBox", "Packaging", status=VendorStatus.INACTIVE.value)

    iso_doc = await add_document(
        session, boxco, iso, DocumentStatus.APPROVED, expiry_date=NOW + timedelta(days=10)
    )
    await add_document(session, boxco, w9, DocumentStatus.APPROVED)
    return iso_doc


async def test_logistics_without_requirements_is_compliant(session):
    vendor = await add_vendor(session, "FreightCo", "Logistics")
    await add_document_type(session, "ISO 9001", ["Packaging"])

    summary = await ComplianceService(session, ORG_ID).vendor_compliance(vendor, NOW)

    assert summary.total_required == 0
    assert summary.percentage == 100


async def test_requirements_report_missing(session):
    vendor = await add_vendor(session, "CrateCo", "Packaging")
    await add_document_type(session, "ISO 9001", ["Packaging"])

    reqs = await ComplianceService(session, ORG_ID).vendor_requirements(vendor.id, NOW)

    assert [(r.document_type.name, r.status) for r in reqs] == [("ISO 9001", DocumentStatus.MISSING)]
    assert reqs[0].document is None


async def test_dashboard_stats(session, portfolio):
    stats = await ComplianceService(session, ORG_ID).dashboard_stats(NOW)

    assert stats.total_vendors == 3
    assert stats.overall_compliance == 67
    assert stats.vendors_at_risk == 2
    assert stats.expiring_this_month == 1


async def test_dashboard_without_vendors(session):
    stats = await ComplianceService(session, ORG_ID).dashboard_stats(NOW)
    assert stats.total_vendors == 0
    assert stats.overall_compliance == 100


async def test_compliance_by_category(session, portfolio):
    rows = await ComplianceService(session, ORG_ID).compliance_by_category(NOW)
    assert [(r.category, r.vendor_count, r.percentage) for r in rows] == [
        ("Logistics", 1, 100),
        ("Packaging", 2, 50),
    ]


async def test_expiring_documents_window(session, portfolio):
    svc = ComplianceService(session, ORG_ID)
    assert await svc.expiring_documents(5, NOW) == []
    assert [d.id for d in await svc.expiring_documents(30, NOW)] == [portfolio.id]


async def test_notification_rule_due_reminders(session, portfolio):
    svc = NotificationRuleService(session, ORG_ID)
    two_weeks = await svc.create_rule(NotificationRuleCreate(name="Two weeks", days_before=14))
    paused = await svc.create_rule(
        NotificationRuleCreate(name="Paused", days_before=30, is_active=False)
    )

    assert [d.id for d in await svc.due_reminders(two_weeks.id, NOW)] == [portfolio.id]
    assert await svc.due_reminders(paused.id, NOW) == []
