"""Document type registry: per-organization requirement templates."""


from sqlalchemy.ext.asyncio import AsyncSession

from vendorcomply.core.exceptions import NotFoundError
from vendorcomply.domain.document import DocumentType
from vendorcomply.domain.enums import ActionType
from vendorcomply.repositories.document import DocumentTypeRepository
from vendorcomply.schemas.document import DocumentTypeCreate, DocumentTypeUpdate
from vendorcomply.services.audit import AuditService
from vendorcomply.services.requirements import resolve_required_document_types

class DocumentTypeService:
    def __init__(self, session: AsyncSession, organization_id: str):
        self._repo = DocumentTypeRepository(session, organization_id)
        self._audit = AuditService(session, organization_id)

    async def list_document_types(self) -> list[DocumentType]:
        return await self._repo.list_by_name()

    async def required_for_category(self, category: str) -> list[DocumentType]:
        return resolve_required_document_types(category, await self._repo.list_by_name())

    async def get_document_type(self, document_type_id: str) -> DocumentType:
        doc_type = await self._repo.get_by_id(document_type_id)
        if not doc_type:
            raise NotFoundError("DocumentType", document_type_id)
        return doc_type

    async def create_document_type(self, data: DocumentTypeCreate, actor_id: str) -> DocumentType:
        doc_type = await self._repo.create(**data.model_dump(exclude_none=True))
        self._audit.record(
            ActionType.CREATED,
            f"Document type {doc_type.name} created",
            actor_id=actor_id,
            details={"documentTypeId": doc_type.id},
        )
        return doc_type

    async def update_document_type(
        self, document_type_id: str, data: DocumentTypeUpdate, actor_id: str
    ) -> DocumentType:
        _ = await self.get_document_type(document_type_id)
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        updated = await self._repo.update(document_type_id, **changes)
        self._audit.record(
            ActionType.UPDATED,
            f"Document type {updated.name} updated",  # type: ignore[union-attr]
            actor_id=actor_id,
            details={"documentTypeId": document_type_id, "fields": sorted(changes)},
        )
        return updated  # type: ignore[return-value]

    async def delete_document_type(self, document_type_id: str, actor_id: str) -> None:
        doc_type = await self.get_document_type(document_type_id)
        await self._repo.soft_delete(document_type_id)
        self._audit.record(
            ActionType.DELETED,
            f"Document type {doc_type.name} deleted",
            actor_id=actor_id,
            details={"documentTypeId": document_type_id},
        )
