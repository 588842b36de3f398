from datetime import UTC, datetime, timedelta

from lendbridge.domain.entities.document import DocumentSubmission
from lendbridge.domain.services.document_risk import DocumentRiskService as DRS

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def make(**kw) -> DocumentSubmission:
    base = dict(borrower_id="b1", user_id="u1", document_type="payslip", file_hash="abc")
    base.update(kw)
    return DocumentSubmission(**base)


def test_missing_exif_scores_twenty():
    risk = DRS.assess(make(), now=NOW)
    assert risk.missing_exif_data is True
    assert risk.risk_score == 20
    assert risk.risk_factors == ["Missing photo metadata"]
    assert not (risk.is_screenshot or risk.edited_with_software or risk.created_recently)


def test_blank_exif_values_count_as_missing():
    risk = DRS.assess(make(exif_data={"Make": "", "Model": None}), now=NOW)
    assert risk.missing_exif_data is True
    assert risk.risk_score == 20


def test_camera_photo_without_flags_scores_zero():
    exif = {"Make": "Canon", "Model": "EOS 80D", "DateTimeOriginal": "2024:01:05 10:00:00"}
    risk = DRS.assess(make(exif_data=exif, file_extension="jpg"), now=NOW)
    assert risk.missing_exif_data is False
    assert risk.risk_score == 0
    assert risk.risk_factors == []


def test_editing_software_and_recent_capture():
    taken = (NOW - timedelta(hours=2)).strftime("%Y:%m:%d %H:%M:%S")
    exif = {"Make": "Apple", "Software": "Adobe Photoshop 25.0", "DateTimeOriginal": taken}
    risk = DRS.assess(make(exif_data=exif), now=NOW)
    assert risk.edited_with_software is True
    assert risk.created_recently is True
    assert risk.risk_score == 25 + 10


def test_screenshot_detection_from_png_without_camera():
    risk = DRS.assess(make(exif_data={"Software": "Android"}, file_extension=".PNG"), now=NOW)
    assert risk.is_screenshot is True
    assert risk.risk_score == 15


def test_modified_after_creation_uses_file_dates():
    risk = DRS.assess(
        make(
            exif_data={"Make": "Samsung"},
            file_created_at="2025-05-01T08:00:00Z",
            file_modified_at="2025-05-03T08:00:00Z",
        ),
        now=NOW,
    )
    assert risk.modified_after_creation is True
    assert risk.risk_score == 15


def test_duplicate_hash_is_flagged_without_changing_missing_exif_score():
    risk = DRS.assess(make(), duplicate_hash=True, now=NOW)
    assert risk.missing_exif_data is True
    assert risk.duplicate_hash is True
    assert risk.risk_score == 20
    assert risk.risk_factors == ["Missing photo metadata", "Document already submitted"]


def test_all_exif_flags_with_duplicate_hash():
    taken = (NOW - timedelta(minutes=5)).strftime("%Y:%m:%d %H:%M:%S")
    exif = {"Software": "GIMP screenshot", "DateTime": taken}
    risk = DRS.assess(
        make(
            exif_data=exif,
            file_extension="png",
            file_created_at="2025-05-01T08:00:00+00:00",
            file_modified_at="2025-05-02T08:00:00+00:00",
        ),
        duplicate_hash=True,
        now=NOW,
    )
    # 25 + 15 + 10 + 15
    assert risk.risk_score == 65
    assert risk.duplicate_hash is True
    assert DRS.assess(make(exif_data=exif), duplicate_hash=True, now=NOW).risk_score <= 100
