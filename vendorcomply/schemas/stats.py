from vendorcomply.schemas.common import CamelModel


class DashboardStatsOut(CamelModel):
    overall_compliance: int
    vendors_at_risk: int
    expiring_this_month: int
    total_vendors: int


class CategoryComplianceOut(CamelModel):
    category: str
    vendor_count: int
    percentage: int
