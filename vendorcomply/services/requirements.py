"""Requirement resolution — which document types a vendor category must supply."""

from __future__ import annotations

from collections.abc import Iterable

from vendorcomply.domain.document import DocumentType


def resolve_required_document_types(
    vendor_category: str,
    all_document_types: Iterable[DocumentType],
) -> list[DocumentType]:
    """Return the required types whose applicable categories include ``vendor_category``.

    Optional types are never returned. An empty result means the category has
    no compliance burden. The result is sorted by name so callers get a stable
    order regardless of input order.
    """
    required = [
        dt for dt in all_document_types
        if dt.is_required and dt.applies_to(vendor_category)
    ]
    return sorted(required, key=lambda dt: (dt.name, dt.id or ""))


def applicable_document_types(
    vendor_category: str,
    all_document_types: Iterable[DocumentType],
) -> list[DocumentType]:
    """Required and optional types a vendor in this category may upload."""
    return sorted(
        (dt for dt in all_document_types if dt.applies_to(vendor_category)),
        key=lambda dt: (dt.name, dt.id or ""),
    )
