"""Effective document status.

The stored ``status`` column only ever moves pending -> approved | rejected.
Whether an approved document has since lapsed is derived here from
``(status, expiry_date, now)`` on every read, never written back.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from vendorcomply.core.clock import ensure_utc
from vendorcomply.domain.document import VendorDocument
from vendorcomply.domain.enums import DocumentStatus

# Higher wins when several documents exist for the same requirement
_PRECEDENCE = {
    DocumentStatus.APPROVED: 4,
    DocumentStatus.PENDING: 3,
    DocumentStatus.REJECTED: 2,
    DocumentStatus.EXPIRED: 1,
    DocumentStatus.MISSING: 0,
}


def effective_status(doc: Optional[VendorDocument], now: datetime) -> DocumentStatus:
    if doc is None:
        return DocumentStatus.MISSING
    stored = DocumentStatus(doc.status)
    expiry = ensure_utc(doc.expiry_date)
    if stored is DocumentStatus.APPROVED and expiry is not None and expiry < ensure_utc(now):
        return DocumentStatus.EXPIRED
    return stored


def best_document(
    documents: Iterable[VendorDocument], now: datetime
) -> tuple[Optional[VendorDocument], DocumentStatus]:
    """Pick the document that best satisfies one requirement.

    Ties on status go to the most recently uploaded document.
    """
    best: Optional[VendorDocument] = None
    best_status = DocumentStatus.MISSING
    for doc in documents:
        status = effective_status(doc, now)
        if best is None or _rank(status, doc) > _rank(best_status, best):
            best, best_status = doc, status
    return best, best_status


def _rank(status: DocumentStatus, doc: VendorDocument) -> tuple:
    uploaded = ensure_utc(doc.uploaded_at or doc.created_at)
    return (_PRECEDENCE[status], uploaded.timestamp() if uploaded else 0.0)


def days_until_expiry(doc: VendorDocument, now: datetime) -> Optional[int]:
    """Whole days until expiry, negative once expired; None without an expiry date."""
    expiry = ensure_utc(doc.expiry_date)
    if expiry is None:
        return None
    return math.ceil((expiry - ensure_utc(now)).total_seconds() / 86400)
