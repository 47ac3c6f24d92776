"""
Device registry reducers and selectors.
"""
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from medtrack.schemas.common import utcnow
from medtrack.schemas.device import Device, DeviceStatus
from medtrack.schemas.filters import DeviceFilters
from medtrack.services import validation
from medtrack.services.records import (
    apply_updates,
    find_by_id,
    matches_choice,
    matches_search,
    remove_by_id,
    replace_by_id,
)

logger = logging.getLogger(__name__)


def build_device(data: Dict[str, Any]) -> Device:
    """Validate a submitted device form and create the record."""
    validation.ensure_valid(validation.validate_device_form(data))
    now = utcnow()
    fields = _clean(data)
    return Device.model_validate({**fields, "created_at": now, "updated_at": now})


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    fields = {key: value for key, value in data.items() if value not in (None, "")}
    if "battery_level" in fields:
        fields["battery_level"] = int(float(fields["battery_level"]) + 0.5)
    return fields


def add_device(devices: Sequence[Device], device: Device) -> List[Device]:
    logger.info(f"[DEVICE] Added {device.device_id} ({device.type})")
    return [*devices, device]


def update_device(devices: Sequence[Device], device_id: str, updates: Dict[str, Any]) -> List[Device]:
    return replace_by_id(devices, device_id, lambda device: apply_updates(device, updates))


def edit_device(devices: Sequence[Device], device_id: str, updates: Dict[str, Any]) -> List[Device]:
    """Form edit: the merged record must pass the same checks as a new device."""
    device = find_by_id(devices, device_id)
    if device is None:
        return list(devices)
    merged = {**device.model_dump(), **updates}
    validation.ensure_valid(validation.validate_device_form(merged))
    return update_device(devices, device_id, _clean(updates))


def delete_device(devices: Sequence[Device], device_id: str) -> List[Device]:
    # Installations, visits and contracts keep their weak reference
    return remove_by_id(devices, device_id)


def update_device_status(devices: Sequence[Device], device_id: str, status: DeviceStatus) -> List[Device]:
    return update_device(devices, device_id, {"status": status})


def update_battery_level(devices: Sequence[Device], device_id: str, battery_level: int) -> List[Device]:
    return update_device(devices, device_id, {"battery_level": battery_level})


# ─────────────────────── Selectors ───────────────────────

def get_device(devices: Sequence[Device], device_id: str) -> Optional[Device]:
    return find_by_id(devices, device_id)


def find_by_device_id(devices: Sequence[Device], scanned: str) -> Optional[Device]:
    """Resolve a scanned QR payload (the human-facing device id) to a device."""
    code = (scanned or "").strip()
    if not code:
        return None
    return next((device for device in devices if device.device_id == code), None)


def filter_devices(devices: Sequence[Device], filters: DeviceFilters) -> List[Device]:
    return [
        device
        for device in devices
        if matches_search(filters.search_term, device.device_id, device.type, device.facility_name)
        and matches_choice(filters.status, device.status)
        and matches_choice(filters.facility, device.facility_name)
    ]


def status_counts(devices: Sequence[Device]) -> Dict[str, int]:
    return dict(Counter(device.status.value for device in devices))


def average_battery_level(devices: Sequence[Device]) -> int:
    """Mean battery level rounded half up; devices without a reading count as 0."""
    if not devices:
        return 0
    total = sum(device.battery_level or 0 for device in devices)
    return int(total / len(devices) + 0.5)
