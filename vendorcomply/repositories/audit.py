"""Audit log repository — append and read only."""

from __future__ import annotations

from vendorcomply.domain.audit import AuditLog
from vendorcomply.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    model = AuditLog

    def append(self, **kwargs) -> AuditLog:
        """Stage an audit row on the current session; it commits with the operation."""
        row = AuditLog(organization_id=self._organization_id, **kwargs)
        self._session.add(row)
        return row
