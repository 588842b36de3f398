from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from lendbridge.domain.entities.document import DocumentSubmission, RiskAssessment

MISSING_EXIF_SCORE = 20
EDITED_SCORE = 25
SCREENSHOT_SCORE = 15
RECENT_SCORE = 10
MODIFIED_SCORE = 15
MAX_SCORE = 100

RECENT_WINDOW = timedelta(hours=24)

SUSPICIOUS_SOFTWARE = (
    "photoshop",
    "gimp",
    "lightroom",
    "snapseed",
    "picsart",
    "canva",
    "pixlr",
    "affinity",
    "paint.net",
)
SCREENSHOT_MARKERS = ("screenshot", "screen shot", "screencapture")
SCREENSHOT_EXTENSIONS = ("png",)


def _parse_exif_datetime(value: Any) -> datetime | None:
    # EXIF stores "YYYY:MM:DD HH:MM:SS" without a zone; treat it as UTC
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), "%Y:%m:%d %H:%M:%S").replace(tzinfo=UTC)
    except ValueError:
        return _parse_iso(value)


def _parse_iso(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class DocumentRiskService:
    """Scores an uploaded document from the metadata reported with it.

    Scores are additive and capped at 100. A document without EXIF metadata
    gets the flat missing-metadata score; the EXIF-based checks only run when
    metadata is present. A re-submitted file hash is flagged for the reviewer
    but does not change the score.
    """

    @staticmethod
    def has_exif(exif: dict[str, Any] | None) -> bool:
        if not exif:
            return False
        return any(v not in (None, "", [], {}) for v in exif.values())

    @staticmethod
    def assess(
        submission: DocumentSubmission,
        *,
        duplicate_hash: bool = False,
        now: datetime | None = None,
    ) -> RiskAssessment:
        now = now or datetime.now(UTC)
        exif = submission.exif_data or {}
        factors: list[str] = []
        score = 0

        missing_exif = not DocumentRiskService.has_exif(exif)
        edited = screenshot = recent = modified = False

        if missing_exif:
            factors.append("Missing photo metadata")
            score += MISSING_EXIF_SCORE
        else:
            software = str(exif.get("Software") or "")
            lowered = software.lower()
            if any(name in lowered for name in SUSPICIOUS_SOFTWARE):
                edited = True
                factors.append(f"Edited with software: {software}")
                score += EDITED_SCORE

            comment = str(exif.get("UserComment") or "").lower()
            no_camera = not exif.get("Make") and not exif.get("Model")
            ext = (submission.file_extension or "").lower().lstrip(".")
            if any(m in lowered or m in comment for m in SCREENSHOT_MARKERS) or (
                no_camera and ext in SCREENSHOT_EXTENSIONS
            ):
                screenshot = True
                factors.append("Image appears to be a screenshot")
                score += SCREENSHOT_SCORE

            taken = _parse_exif_datetime(exif.get("DateTimeOriginal") or exif.get("DateTime"))
            if taken is not None and timedelta(0) <= now - taken < RECENT_WINDOW:
                recent = True
                factors.append("Photo taken within the last 24 hours")
                score += RECENT_SCORE

            created = _parse_iso(submission.file_created_at)
            changed = _parse_iso(submission.file_modified_at)
            if created is not None and changed is not None and changed > created:
                modified = True
                factors.append("File modified after creation")
                score += MODIFIED_SCORE

        if duplicate_hash:
            factors.append("Document already submitted")

        return RiskAssessment(
            created_recently=recent,
            missing_exif_data=missing_exif,
            is_screenshot=screenshot,
            edited_with_software=edited,
            modified_after_creation=modified,
            duplicate_hash=duplicate_hash,
            risk_score=min(score, MAX_SCORE),
            risk_factors=factors,
        )
