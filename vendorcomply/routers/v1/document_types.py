"""Document type (requirement template) router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.response import CollectionResponse, DataResponse
from vendorcomply.db.base import get_db
from vendorcomply.dependencies import get_current_user, require_editor
from vendorcomply.domain.organization import User
from vendorcomply.schemas.document import DocumentTypeCreate, DocumentTypeOut, DocumentTypeUpdate
from vendorcomply.services.document_types import DocumentTypeService

router = APIRouter(prefix="/document-types", tags=["Document Types"])


def _svc(session: AsyncSession, user: User) -> DocumentTypeService:
    return DocumentTypeService(session, user.organization_id)


@router.get("", response_model=CollectionResponse[DocumentTypeOut])
async def list_document_types(
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    items = await _svc(session, user).list_document_types()
    return {"data": [DocumentTypeOut.model_validate(t) for t in items]}


@router.get("/required", response_model=CollectionResponse[DocumentTypeOut])
async def required_document_types(
    category: str = Query(..., min_length=1, description="Vendor category"),
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Required document types a vendor in ``category`` must supply."""
    items = await _svc(session, user).required_for_category(category)
    return {"data": [DocumentTypeOut.model_validate(t) for t in items]}


@router.post("", response_model=DataResponse[DocumentTypeOut], status_code=status.HTTP_201_CREATED)
async def create_document_type(
    body: DocumentTypeCreate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    doc_type = await _svc(session, user).create_document_type(body, actor_id=user.id)
    return {"data": DocumentTypeOut.model_validate(doc_type)}


@router.get("/{document_type_id}", response_model=DataResponse[DocumentTypeOut])
async def get_document_type(
    document_type_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    doc_type = await _svc(session, user).get_document_type(document_type_id)
    return {"data": DocumentTypeOut.model_validate(doc_type)}


@router.patch("/{document_type_id}", response_model=DataResponse[DocumentTypeOut])
async def update_document_type(
    document_type_id: str,
    body: DocumentTypeUpdate,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    doc_type = await _svc(session, user).update_document_type(
        document_type_id, body, actor_id=user.id
    )
    return {"data": DocumentTypeOut.model_validate(doc_type)}


@router.delete("/{document_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document_type(
    document_type_id: str,
    session: AsyncSession = Depends(get_db),
    user: User = Depends(require_editor),
):
    await _svc(session, user).delete_document_type(document_type_id, actor_id=user.id)
