from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "VendorComply API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    # Database (PostgreSQL via asyncpg in production or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vendorcomply_dev.db",
        alias="DATABASE_URL",
    )

    # Multi-tenancy default: principals seen for the first time land here
    default_organization_id: str = Field(
        default="default", alias="DEFAULT_ORGANIZATION_ID",
    )
    default_organization_name: str = Field(
        default="Default Organization", alias="DEFAULT_ORGANIZATION_NAME",
    )

    # Vendor portal
    portal_token_validity_days: int = Field(
        default=30, alias="PORTAL_TOKEN_VALIDITY_DAYS",
    )
    portal_base_url: str = Field(default="/portal", alias="PORTAL_BASE_URL")

    # File uploads
    upload_dir: Path = Field(default=Path("uploads"), alias="UPLOAD_DIR")
    max_upload_size_mb: int = 10

    # Dashboard statistics
    at_risk_compliance_threshold: int = Field(
        default=70, alias="AT_RISK_COMPLIANCE_THRESHOLD",
    )  # Vendors below this percentage count as "at risk"
    expiring_window_days: int = Field(default=90, alias="EXPIRING_WINDOW_DAYS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
