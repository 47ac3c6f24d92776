"""
Device inventory routes: CRUD, status and battery updates, QR lookup.
"""
import logging

from fastapi import APIRouter, Depends, Query, status

from medtrack.api.deps import get_or_404, get_store
from medtrack.schemas.common import ALL
from medtrack.schemas.device import (
    DEVICE_TYPES,
    BatteryLevelUpdate,
    DeviceCreate,
    DeviceStatusUpdate,
    DeviceUpdate,
)
from medtrack.schemas.filters import DeviceFilters
from medtrack.services import device_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["devices"])
logger = logging.getLogger(__name__)


@router.get("/")
def list_devices(
    search: str = "",
    status_filter: str = Query(ALL, alias="status"),
    facility: str = ALL,
    store: AppStore = Depends(get_store),
):
    filters = DeviceFilters(search_term=search, status=status_filter, facility=facility)
    return device_service.filter_devices(store.state.devices, filters)


@router.get("/types")
def list_device_types():
    return DEVICE_TYPES


@router.get("/lookup/{code}")
def lookup_device(code: str, store: AppStore = Depends(get_store)):
    """Resolve a scanned QR code (the device id printed on the label)."""
    device = device_service.find_by_device_id(store.state.devices, code)
    if device is None:
        logger.info(f"[DEVICE] QR lookup miss for '{code}'")
    return get_or_404(device, "Device")


@router.get("/{device_id}")
def get_device(device_id: str, store: AppStore = Depends(get_store)):
    return get_or_404(device_service.get_device(store.state.devices, device_id), "Device")


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_device(device_in: DeviceCreate, store: AppStore = Depends(get_store)):
    device = device_service.build_device(device_in.model_dump())
    store.dispatch("devices", device_service.add_device, device)
    return device


@router.put("/{device_id}")
def update_device(device_id: str, device_in: DeviceUpdate, store: AppStore = Depends(get_store)):
    get_or_404(device_service.get_device(store.state.devices, device_id), "Device")
    state = store.dispatch(
        "devices", device_service.edit_device, device_id, device_in.model_dump(exclude_unset=True)
    )
    return device_service.get_device(state.devices, device_id)


@router.patch("/{device_id}/status")
def update_device_status(device_id: str, payload: DeviceStatusUpdate, store: AppStore = Depends(get_store)):
    get_or_404(device_service.get_device(store.state.devices, device_id), "Device")
    state = store.dispatch("devices", device_service.update_device_status, device_id, payload.status)
    return device_service.get_device(state.devices, device_id)


@router.patch("/{device_id}/battery")
def update_battery_level(device_id: str, payload: BatteryLevelUpdate, store: AppStore = Depends(get_store)):
    get_or_404(device_service.get_device(store.state.devices, device_id), "Device")
    state = store.dispatch("devices", device_service.update_battery_level, device_id, payload.battery_level)
    return device_service.get_device(state.devices, device_id)


@router.delete("/{device_id}")
def delete_device(device_id: str, store: AppStore = Depends(get_store)):
    get_or_404(device_service.get_device(store.state.devices, device_id), "Device")
    store.dispatch("devices", device_service.delete_device, device_id)
    return {"success": True, "message": "Device deleted"}
