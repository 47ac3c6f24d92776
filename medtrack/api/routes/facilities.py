"""
Facility routes.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from medtrack.api.deps import get_or_404, get_store
from medtrack.schemas.facility import (
    DepartmentIn,
    DeviceCountUpdate,
    FacilityCreate,
    FacilityStatusUpdate,
    FacilityUpdate,
    LastVisitUpdate,
)
from medtrack.services import facility_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["facilities"])
logger = logging.getLogger(__name__)


def _facility_or_404(store: AppStore, facility_id: str):
    return get_or_404(facility_service.get_facility(store.state.facilities, facility_id), "Facility")


def _dispatch(store: AppStore, reducer, facility_id: str, *args):
    _facility_or_404(store, facility_id)
    state = store.dispatch("facilities", reducer, facility_id, *args)
    return facility_service.get_facility(state.facilities, facility_id)


@router.get("/")
def list_facilities(
    active_only: bool = False,
    type: Optional[str] = None,
    store: AppStore = Depends(get_store),
):
    facilities = store.state.facilities
    if active_only:
        facilities = facility_service.active_facilities(facilities)
    if type:
        facilities = facility_service.facilities_by_type(facilities, type)
    return facilities


@router.get("/options")
def facility_options(store: AppStore = Depends(get_store)):
    """Value/label pairs for facility pickers."""
    return facility_service.facility_options(store.state.facilities)


@router.get("/contracts/expired")
def facilities_with_expired_contracts(store: AppStore = Depends(get_store)):
    return facility_service.facilities_with_expired_contracts(store.state.facilities)


@router.get("/contracts/expiring")
def facilities_with_expiring_contracts(days_ahead: int = 30, store: AppStore = Depends(get_store)):
    return facility_service.facilities_with_expiring_contracts(store.state.facilities, days_ahead)


@router.get("/{facility_id}")
def get_facility(facility_id: str, store: AppStore = Depends(get_store)):
    return _facility_or_404(store, facility_id)


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_facility(facility_in: FacilityCreate, store: AppStore = Depends(get_store)):
    # The id depends on the facilities already present, so build inside the dispatch
    def _add(facilities):
        return facility_service.add_facility(
            facilities, facility_service.build_facility(facilities, facility_in.model_dump())
        )

    state = store.dispatch("facilities", _add)
    return state.facilities[-1]


@router.put("/{facility_id}")
def update_facility(facility_id: str, facility_in: FacilityUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, facility_service.edit_facility, facility_id, facility_in.model_dump(exclude_unset=True))


@router.patch("/{facility_id}/device-count")
def update_device_count(facility_id: str, payload: DeviceCountUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, facility_service.update_facility_device_count, facility_id, payload.count)


@router.patch("/{facility_id}/last-visit")
def update_last_visit(facility_id: str, payload: LastVisitUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, facility_service.update_facility_last_visit, facility_id, payload.visit_date)


@router.post("/{facility_id}/departments")
def add_department(facility_id: str, payload: DepartmentIn, store: AppStore = Depends(get_store)):
    return _dispatch(store, facility_service.add_facility_department, facility_id, payload.department)


@router.delete("/{facility_id}/departments/{department}")
def remove_department(facility_id: str, department: str, store: AppStore = Depends(get_store)):
    return _dispatch(store, facility_service.remove_facility_department, facility_id, department)


@router.patch("/{facility_id}/status")
def update_facility_status(facility_id: str, payload: FacilityStatusUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(store, facility_service.update_facility_status, facility_id, payload.status)


@router.delete("/{facility_id}")
def delete_facility(facility_id: str, store: AppStore = Depends(get_store)):
    _facility_or_404(store, facility_id)
    store.dispatch("facilities", facility_service.delete_facility, facility_id)
    return {"success": True, "message": "Facility deleted"}
