"""
Photo log routes: uploads metadata, tags, alerts and filtering.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status

from medtrack.api.deps import get_or_404, get_store
from medtrack.schemas.common import ALL
from medtrack.schemas.filters import PhotoLogFilters
from medtrack.schemas.photo_log import BulkDeleteRequest, PhotoAlertUpdate, PhotoLogCreate, PhotoLogUpdate, PhotoTag
from medtrack.services import photo_log_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["photo-logs"])
logger = logging.getLogger(__name__)


def _photo_or_404(store: AppStore, photo_id: str):
    return get_or_404(photo_log_service.get_photo_log(store.state.photo_logs, photo_id), "Photo log")


def _dispatch(store: AppStore, reducer, photo_id: str, *args):
    _photo_or_404(store, photo_id)
    state = store.dispatch("photo_logs", reducer, photo_id, *args)
    return photo_log_service.get_photo_log(state.photo_logs, photo_id)


@router.get("/")
def list_photo_logs(
    search: str = "",
    device_id: str = ALL,
    category: str = ALL,
    alert_level: str = ALL,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store: AppStore = Depends(get_store),
):
    filters = PhotoLogFilters(
        search_term=search,
        device_id=device_id,
        category=category,
        alert_level=alert_level,
        start_date=start_date,
        end_date=end_date,
    )
    return photo_log_service.filter_photo_logs(store.state.photo_logs, filters)


@router.get("/alerts")
def list_alert_photos(store: AppStore = Depends(get_store)):
    return photo_log_service.alert_photos(store.state.photo_logs)


@router.get("/recent")
def list_recent_photos(limit: int = 10, store: AppStore = Depends(get_store)):
    return photo_log_service.recent_photos(store.state.photo_logs, limit)


@router.get("/{photo_id}")
def get_photo_log(photo_id: str, store: AppStore = Depends(get_store)):
    return _photo_or_404(store, photo_id)


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_photo_log(photo_in: PhotoLogCreate, store: AppStore = Depends(get_store)):
    photo = photo_log_service.build_photo_log(photo_in.model_dump())
    store.dispatch("photo_logs", photo_log_service.add_photo_log, photo)
    return photo


@router.put("/{photo_id}")
def update_photo_log(photo_id: str, photo_in: PhotoLogUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, photo_log_service.update_photo_log, photo_id, photo_in.model_dump(exclude_unset=True))


@router.post("/{photo_id}/tags")
def add_photo_tag(photo_id: str, payload: PhotoTag, store: AppStore = Depends(get_store)):
    return _dispatch(store, photo_log_service.add_photo_tag, photo_id, payload.tag)


@router.delete("/{photo_id}/tags/{tag}")
def remove_photo_tag(photo_id: str, tag: str, store: AppStore = Depends(get_store)):
    return _dispatch(store, photo_log_service.remove_photo_tag, photo_id, tag)


@router.patch("/{photo_id}/alert")
def update_photo_alert(photo_id: str, payload: PhotoAlertUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, photo_log_service.update_photo_alert, photo_id, payload.is_alert, payload.alert_level)


@router.post("/bulk-delete")
def bulk_delete_photos(payload: BulkDeleteRequest, store: AppStore = Depends(get_store)):
    before = len(store.state.photo_logs)
    state = store.dispatch("photo_logs", photo_log_service.bulk_delete_photos, payload.photo_ids)
    return {"success": True, "deleted": before - len(state.photo_logs)}


@router.delete("/{photo_id}")
def delete_photo_log(photo_id: str, store: AppStore = Depends(get_store)):
    _photo_or_404(store, photo_id)
    store.dispatch("photo_logs", photo_log_service.delete_photo_log, photo_id)
    return {"success": True, "message": "Photo log deleted"}
