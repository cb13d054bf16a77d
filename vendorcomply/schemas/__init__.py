"""Pydantic schemas package.

Folder intent:
  common.py        — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  vendor.py        — vendor CRUD, portal view and portal token responses
  document.py      — document types, vendor documents, requirements, compliance
  stats.py         — dashboard aggregates
  audit.py, billing.py, user.py, notification.py — supporting resources
"""
