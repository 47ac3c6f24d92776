"""
Photo documentation log. Newest entries are kept first.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.common import utcnow
from medtrack.schemas.filters import PhotoLogFilters
from medtrack.schemas.photo_log import AlertLevel, PhotoCategory, PhotoLog
from medtrack.services import validation
from medtrack.services.records import (
    apply_updates,
    find_by_id,
    in_date_range,
    matches_choice,
    matches_search,
    remove_by_id,
    replace_by_id,
)

logger = logging.getLogger(__name__)


def build_photo_log(data: Dict[str, Any]) -> PhotoLog:
    """Check the upload and stamp upload date and metadata timestamp."""
    problems = validation.validate_photo_upload(data.get("mime_type"), data.get("file_size"))
    if problems:
        raise FormValidationError({"file": " ".join(problems)})
    now = utcnow()
    is_alert = bool(data.get("is_alert"))
    metadata = {"timestamp": now, **{k: v for k, v in (data.get("metadata") or {}).items() if v is not None}}
    return PhotoLog.model_validate(
        {
            **{key: value for key, value in data.items() if value is not None},
            "upload_date": now,
            "tags": data.get("tags") or [],
            "is_alert": is_alert,
            "alert_level": data.get("alert_level") if is_alert else None,
            "metadata": metadata,
        }
    )


def add_photo_log(photo_logs: Sequence[PhotoLog], photo: PhotoLog) -> List[PhotoLog]:
    if photo.is_alert:
        logger.warning(f"[PHOTO] Alert photo '{photo.filename}' ({photo.alert_level}) for device {photo.device_id}")
    return [photo, *photo_logs]


def update_photo_log(photo_logs: Sequence[PhotoLog], photo_id: str, updates: Dict[str, Any]) -> List[PhotoLog]:
    return replace_by_id(photo_logs, photo_id, lambda photo: apply_updates(photo, updates, touch=False))


def delete_photo_log(photo_logs: Sequence[PhotoLog], photo_id: str) -> List[PhotoLog]:
    return remove_by_id(photo_logs, photo_id)


def bulk_delete_photos(photo_logs: Sequence[PhotoLog], photo_ids: Iterable[str]) -> List[PhotoLog]:
    doomed = set(photo_ids)
    return [photo for photo in photo_logs if photo.id not in doomed]


def add_photo_tag(photo_logs: Sequence[PhotoLog], photo_id: str, tag: str) -> List[PhotoLog]:
    def _tag(photo: PhotoLog) -> PhotoLog:
        if tag in photo.tags:
            return photo
        return apply_updates(photo, {"tags": [*photo.tags, tag]}, touch=False)

    return replace_by_id(photo_logs, photo_id, _tag)


def remove_photo_tag(photo_logs: Sequence[PhotoLog], photo_id: str, tag: str) -> List[PhotoLog]:
    return replace_by_id(
        photo_logs,
        photo_id,
        lambda photo: apply_updates(photo, {"tags": [t for t in photo.tags if t != tag]}, touch=False),
    )


def update_photo_alert(
    photo_logs: Sequence[PhotoLog], photo_id: str, is_alert: bool, alert_level: Optional[AlertLevel] = None
) -> List[PhotoLog]:
    updates = {"is_alert": is_alert, "alert_level": alert_level if is_alert else None}
    return replace_by_id(photo_logs, photo_id, lambda photo: apply_updates(photo, updates, touch=False))


# ─────────────────────── Selectors ───────────────────────

def get_photo_log(photo_logs: Sequence[PhotoLog], photo_id: str) -> Optional[PhotoLog]:
    return find_by_id(photo_logs, photo_id)


def photos_for_device(photo_logs: Sequence[PhotoLog], device_id: str) -> List[PhotoLog]:
    return [photo for photo in photo_logs if photo.device_id == device_id]


def alert_photos(photo_logs: Sequence[PhotoLog]) -> List[PhotoLog]:
    return [photo for photo in photo_logs if photo.is_alert]


def photos_by_category(photo_logs: Sequence[PhotoLog], category: PhotoCategory) -> List[PhotoLog]:
    return [photo for photo in photo_logs if photo.category == category]


def recent_photos(photo_logs: Sequence[PhotoLog], limit: int = 10) -> List[PhotoLog]:
    return list(photo_logs[:limit])


def photos_for_service_visit(photo_logs: Sequence[PhotoLog], visit_id: str) -> List[PhotoLog]:
    return [photo for photo in photo_logs if photo.related_service_visit_id == visit_id]


def photos_for_installation(photo_logs: Sequence[PhotoLog], installation_id: str) -> List[PhotoLog]:
    return [photo for photo in photo_logs if photo.related_installation_id == installation_id]


def filter_photo_logs(photo_logs: Sequence[PhotoLog], filters: PhotoLogFilters) -> List[PhotoLog]:
    return [
        photo
        for photo in photo_logs
        if matches_search(filters.search_term, photo.description, photo.device_id, photo.facility_name, photo.tags)
        and matches_choice(filters.device_id, photo.device_id)
        and matches_choice(filters.category, photo.category)
        and matches_choice(filters.alert_level, photo.alert_level)
        and in_date_range(photo.upload_date, filters.start_date, filters.end_date)
    ]
