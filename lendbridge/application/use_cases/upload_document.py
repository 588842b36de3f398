from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from lendbridge.application.dtos.borrower_dto import UploadDocumentBody
from lendbridge.domain.entities.document import DocumentSubmission
from lendbridge.domain.errors import InvalidInput
from lendbridge.domain.services.document_risk import DocumentRiskService
from lendbridge.infrastructure.database.repositories.document_repository import DocumentRepository

REQUIRED_FIELDS = ("borrower_id", "user_id", "document_type", "file_hash")


@dataclass
class UploadDocumentUseCase:
    documents: DocumentRepository

    @staticmethod
    def to_submission(body: UploadDocumentBody) -> DocumentSubmission:
        missing = [
            name for name in REQUIRED_FIELDS if not (getattr(body, name) or "").strip()
        ]
        if missing:
            raise InvalidInput("Missing required fields", details={"missing": missing})
        return DocumentSubmission(
            borrower_id=body.borrower_id.strip(),  # type: ignore[union-attr]
            user_id=body.user_id.strip(),  # type: ignore[union-attr]
            document_type=body.document_type.strip(),  # type: ignore[union-attr]
            file_hash=body.file_hash.strip(),  # type: ignore[union-attr]
            file_size_bytes=body.file_size_bytes,
            file_extension=body.file_extension,
            exif_data=body.exif_data or {},
            file_created_at=body.file_created_at,
            file_modified_at=body.file_modified_at,
        )

    def execute(self, body: UploadDocumentBody) -> dict[str, Any]:
        """Score the document and store it as pending review.

        Validation happens before any backend call, so a rejected request
        writes nothing.
        """
        submission = self.to_submission(body)
        duplicate = self.documents.hash_exists(submission.file_hash)
        risk = DocumentRiskService.assess(submission, duplicate_hash=duplicate)
        row = self.documents.create(submission, risk)
        logger.info(
            "Stored {} document for borrower {} (risk {})",
            submission.document_type,
            submission.borrower_id,
            risk.risk_score,
        )
        return row
