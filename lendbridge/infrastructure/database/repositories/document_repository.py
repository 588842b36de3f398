from __future__ import annotations

from typing import Any

from lendbridge.domain.entities.document import DocumentSubmission, RiskAssessment
from lendbridge.domain.errors import BackendFailure
from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class DocumentRepository(SupabaseRepository):
    table = "borrower_documents"

    def hash_exists(self, file_hash: str) -> bool:
        res = self._run(
            "Document hash lookup",
            lambda: self.client.table(self.table)
            .select("id")
            .eq("file_hash", file_hash)
            .limit(1)
            .execute(),
        )
        return bool(self._rows(res))

    def create(self, doc: DocumentSubmission, risk: RiskAssessment) -> dict[str, Any]:
        row = {
            "borrower_id": doc.borrower_id,
            "user_id": doc.user_id,
            "document_type": doc.document_type,
            "file_hash": doc.file_hash,
            "file_size_bytes": doc.file_size_bytes,
            "file_extension": doc.file_extension,
            "exif_data": doc.exif_data or {},
            "file_created_at": doc.file_created_at,
            "file_modified_at": doc.file_modified_at,
            "created_recently": risk.created_recently,
            "missing_exif_data": risk.missing_exif_data,
            "is_screenshot": risk.is_screenshot,
            "edited_with_software": risk.edited_with_software,
            "modified_after_creation": risk.modified_after_creation,
            "duplicate_hash": risk.duplicate_hash,
            "risk_score": risk.risk_score,
            "risk_factors": list(risk.risk_factors),
            "status": "pending",
        }
        res = self._run(
            "Document insert",
            lambda: self.client.table(self.table).insert(row).execute(),
        )
        created = self._first(res)
        if created is None:
            raise BackendFailure("Document insert returned no row")
        return created
