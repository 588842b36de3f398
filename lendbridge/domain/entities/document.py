from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DocumentSubmission:
    """A borrower document as reported by the client before it is stored."""

    borrower_id: str
    user_id: str
    document_type: str
    file_hash: str
    file_size_bytes: int | None = None
    file_extension: str | None = None
    exif_data: dict[str, Any] = field(default_factory=dict)
    file_created_at: str | None = None
    file_modified_at: str | None = None


@dataclass(frozen=True)
class RiskAssessment:
    created_recently: bool = False
    missing_exif_data: bool = False
    is_screenshot: bool = False
    edited_with_software: bool = False
    modified_after_creation: bool = False
    duplicate_hash: bool = False
    risk_score: int = 0
    risk_factors: list[str] = field(default_factory=list)
