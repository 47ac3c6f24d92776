from datetime import date

import pytest

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.filters import PhotoLogFilters
from medtrack.schemas.photo_log import AlertLevel, PhotoCategory
from medtrack.services import photo_log_service


@pytest.fixture
def upload():
    return {
        "filename": "pump_leak.jpg",
        "mime_type": "image/png",
        "file_size": 2048,
        "device_id": "MD-002",
        "description": "Leak under the pump housing",
        "category": "Issue Documentation",
        "is_alert": False,
        "alert_level": "High",
        "tags": None,
        "metadata": {"camera": "Pixel 8"},
    }


def test_build_photo_log_stamps_dates(upload):
    photo = photo_log_service.build_photo_log(upload)

    assert photo.upload_date is not None
    assert photo.metadata.timestamp is not None
    assert photo.metadata.camera == "Pixel 8"
    assert photo.tags == []
    assert photo.alert_level is None
    assert photo.category == PhotoCategory.ISSUE_DOCUMENTATION


def test_alert_photo_keeps_level(upload):
    upload["is_alert"] = True
    photo = photo_log_service.build_photo_log(upload)
    assert photo.is_alert is True
    assert photo.alert_level == AlertLevel.HIGH


@pytest.mark.parametrize(
    "mime_type, size",
    [("application/pdf", 2048), ("image/jpeg", 11 * 1024 * 1024), (None, None)],
)
def test_rejected_uploads(upload, mime_type, size):
    upload.update(mime_type=mime_type, file_size=size)
    with pytest.raises(FormValidationError) as exc_info:
        photo_log_service.build_photo_log(upload)
    assert "file" in exc_info.value.errors


def test_new_photos_go_first(state, upload):
    photo = photo_log_service.build_photo_log(upload)
    photos = photo_log_service.add_photo_log(state.photo_logs, photo)
    assert photos[0].id == photo.id
    assert len(photos) == 3


def test_tags(state):
    photo = state.photo_logs[0]
    photos = photo_log_service.add_photo_tag(state.photo_logs, photo.id, "routine")
    photos = photo_log_service.add_photo_tag(photos, photo.id, "ward-1")
    assert photo_log_service.get_photo_log(photos, photo.id).tags == [
        "monthly-check",
        "good-condition",
        "routine",
        "ward-1",
    ]

    photos = photo_log_service.remove_photo_tag(photos, photo.id, "routine")
    assert "routine" not in photo_log_service.get_photo_log(photos, photo.id).tags


def test_clearing_alert_drops_level(state):
    alert = photo_log_service.alert_photos(state.photo_logs)[0]
    photos = photo_log_service.update_photo_alert(state.photo_logs, alert.id, False, AlertLevel.CRITICAL)
    updated = photo_log_service.get_photo_log(photos, alert.id)

    assert updated.is_alert is False
    assert updated.alert_level is None


def test_search_includes_tags(state):
    result = photo_log_service.filter_photo_logs(state.photo_logs, PhotoLogFilters(search_term="display-prob"))
    assert [p.device_id for p in result] == ["MD-002"]


def test_date_range_is_inclusive(state):
    same_day = PhotoLogFilters(start_date=date(2024, 1, 15), end_date=date(2024, 1, 15))
    assert [p.filename for p in photo_log_service.filter_photo_logs(state.photo_logs, same_day)] == [
        "device_condition_jan2024.jpg"
    ]

    gap = PhotoLogFilters(start_date=date(2024, 1, 11), end_date=date(2024, 1, 14))
    assert photo_log_service.filter_photo_logs(state.photo_logs, gap) == []


def test_date_range_needs_both_bounds(state):
    only_start = PhotoLogFilters(start_date=date(2030, 1, 1))
    assert len(photo_log_service.filter_photo_logs(state.photo_logs, only_start)) == 2


def test_categorical_filters(state):
    high = PhotoLogFilters(alert_level="High")
    assert [p.device_id for p in photo_log_service.filter_photo_logs(state.photo_logs, high)] == ["MD-002"]

    checks = PhotoLogFilters(category="Condition Check", device_id="MD-001")
    assert len(photo_log_service.filter_photo_logs(state.photo_logs, checks)) == 1


def test_bulk_delete(state):
    ids = [photo.id for photo in state.photo_logs]
    assert photo_log_service.bulk_delete_photos(state.photo_logs, [ids[0], "missing"]) == state.photo_logs[1:]


def test_related_record_selectors(state):
    photo = state.photo_logs[0]
    photos = photo_log_service.update_photo_log(
        state.photo_logs, photo.id, {"related_installation_id": "inst-1", "related_service_visit_id": "visit-1"}
    )
    assert len(photo_log_service.photos_for_installation(photos, "inst-1")) == 1
    assert len(photo_log_service.photos_for_service_visit(photos, "visit-1")) == 1
    assert len(photo_log_service.photos_for_device(photos, "MD-001")) == 1
    assert len(photo_log_service.photos_by_category(photos, PhotoCategory.CONDITION_CHECK)) == 1
    assert len(photo_log_service.recent_photos(photos, limit=1)) == 1
