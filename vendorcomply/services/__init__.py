"""Services package — all business logic lives here, never in routers.

Files:
  requirements.py    — which document types a vendor category must supply (pure)
  status.py          — effective document status, derived on read (pure)
  compliance.py      — per-vendor compliance, category/organization rollups, dashboard stats
  documents.py       — upload / approve / reject lifecycle
  document_types.py  — requirement template registry
  portal.py          — portal token issue and resolution
  vendor.py          — vendor registry
  billing.py         — plan tiers and usage ceilings
  users.py           — identity-provider principals mapped to users
  notifications.py   — expiry reminder rules
  audit.py           — audit sink used by every mutating operation
  file_storage.py    — local blob storage for uploads

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in services. No FastAPI imports in services.
"""
