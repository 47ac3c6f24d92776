"""
Installation routes: checklist, training, photos.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic.alias_generators import to_snake

from medtrack.api.deps import get_or_404, get_store
from medtrack.schemas.common import FileRefIn
from medtrack.schemas.installation import (
    ChecklistItemUpdate,
    InstallationCreate,
    InstallationUpdate,
    TrainingUpdate,
)
from medtrack.services import installation_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["installations"])
logger = logging.getLogger(__name__)


def _installation_or_404(store: AppStore, installation_id: str):
    return get_or_404(
        installation_service.get_installation(store.state.installations, installation_id), "Installation"
    )


def _with_progress(installation):
    return {
        **installation.model_dump(mode="json", by_alias=True),
        "completionPercentage": installation_service.completion_percentage(installation),
    }


@router.get("/")
def list_installations(
    device_id: Optional[str] = None,
    pending: bool = False,
    store: AppStore = Depends(get_store),
):
    installations = store.state.installations
    if device_id:
        installations = installation_service.installations_for_device(installations, device_id)
    if pending:
        installations = installation_service.pending_installations(installations)
    return [_with_progress(installation) for installation in installations]


@router.get("/{installation_id}")
def get_installation(installation_id: str, store: AppStore = Depends(get_store)):
    return _with_progress(_installation_or_404(store, installation_id))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_installation(installation_in: InstallationCreate, store: AppStore = Depends(get_store)):
    installation = installation_service.build_installation(installation_in.model_dump())
    store.dispatch("installations", installation_service.add_installation, installation)
    logger.info(f"[INSTALLATION] Started {installation.id} for device {installation.device_id}")
    return _with_progress(installation)


@router.put("/{installation_id}")
def update_installation(
    installation_id: str, installation_in: InstallationUpdate, store: AppStore = Depends(get_store)
):
    _installation_or_404(store, installation_id)
    state = store.dispatch(
        "installations",
        installation_service.edit_installation,
        installation_id,
        installation_in.model_dump(exclude_unset=True),
    )
    return _with_progress(installation_service.get_installation(state.installations, installation_id))


@router.patch("/{installation_id}/checklist")
def update_checklist_item(
    installation_id: str, payload: ChecklistItemUpdate, store: AppStore = Depends(get_store)
):
    _installation_or_404(store, installation_id)
    try:
        state = store.dispatch(
            "installations",
            installation_service.update_checklist_item,
            installation_id,
            to_snake(payload.item),
            payload.value,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _with_progress(installation_service.get_installation(state.installations, installation_id))


@router.patch("/{installation_id}/training")
def update_training_status(installation_id: str, payload: TrainingUpdate, store: AppStore = Depends(get_store)):
    _installation_or_404(store, installation_id)
    state = store.dispatch(
        "installations",
        installation_service.update_training_status,
        installation_id,
        payload.training_completed,
        payload.training_date,
        payload.trained_personnel,
    )
    return _with_progress(installation_service.get_installation(state.installations, installation_id))


@router.post("/{installation_id}/photos", status_code=status.HTTP_201_CREATED)
def add_installation_photo(installation_id: str, photo_in: FileRefIn, store: AppStore = Depends(get_store)):
    _installation_or_404(store, installation_id)
    state = store.dispatch(
        "installations", installation_service.add_installation_photo, installation_id, photo_in.model_dump()
    )
    return _with_progress(installation_service.get_installation(state.installations, installation_id))


@router.delete("/{installation_id}/photos/{photo_id}")
def remove_installation_photo(installation_id: str, photo_id: str, store: AppStore = Depends(get_store)):
    _installation_or_404(store, installation_id)
    state = store.dispatch(
        "installations", installation_service.remove_installation_photo, installation_id, photo_id
    )
    return _with_progress(installation_service.get_installation(state.installations, installation_id))


@router.delete("/{installation_id}")
def delete_installation(installation_id: str, store: AppStore = Depends(get_store)):
    _installation_or_404(store, installation_id)
    store.dispatch("installations", installation_service.delete_installation, installation_id)
    return {"success": True, "message": "Installation deleted"}
