from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VerificationStatusResponse(BaseModel):
    """Borrower self-verification state and where the client should go next."""
    user_id: str = Field(..., description="Authenticated user id")
    borrower_id: str | None = Field(None, description="Linked borrower id")
    has_borrower_record: bool = Field(..., description="Whether a borrower link exists")
    verification_status: str | None = Field(
        None, description="pending | approved | rejected | no_record", examples=["pending"]
    )
    selfie_uploaded: bool | None = Field(None, description="Whether a selfie was uploaded")
    created_at: str | datetime | None = Field(None, description="When verification was requested")
    verified_at: str | datetime | None = Field(None, description="When verification was approved")
    rejection_reason: str | None = Field(None, description="Reason given on rejection")
    message: str = Field(..., description="Next step for the client")


class UploadDocumentBody(BaseModel):
    """Document metadata reported by the client.

    All fields are optional at the schema level; the handler reports missing
    required ones with a single 400.
    """
    model_config = ConfigDict(populate_by_name=True)

    borrower_id: str | None = Field(None, alias="borrowerId")
    user_id: str | None = Field(None, alias="userId")
    document_type: str | None = Field(None, alias="documentType", examples=["national_id"])
    file_hash: str | None = Field(None, alias="fileHash", description="SHA-256 of the file")
    file_size_bytes: int | None = Field(None, alias="fileSizeBytes", ge=0)
    file_extension: str | None = Field(None, alias="fileExtension", examples=["jpg"])
    exif_data: dict[str, Any] | None = Field(None, alias="exifData")
    file_created_at: str | None = Field(None, alias="fileCreatedAt")
    file_modified_at: str | None = Field(None, alias="fileModifiedAt")


class UploadDocumentResponse(BaseModel):
    data: dict[str, Any] = Field(..., description="The stored document row")


class DocumentMetadataResponse(BaseModel):
    """Metadata extracted from an uploaded image."""
    file_hash: str = Field(..., description="SHA-256 of the uploaded bytes")
    file_size_bytes: int = Field(..., ge=0)
    file_extension: str | None = Field(None, examples=["jpg"])
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    format: str | None = Field(None, examples=["JPEG"])
    exif_data: dict[str, Any] = Field(default_factory=dict)
