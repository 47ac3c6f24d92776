import pytest

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.device import DeviceStatus
from medtrack.schemas.filters import DeviceFilters
from medtrack.services import device_service


def test_build_device_rounds_battery_level(device_form):
    device = device_service.build_device(device_form)

    assert device.device_id == "MD-003"
    assert device.battery_level == 73
    assert device.status == DeviceStatus.ONLINE
    assert device.created_at is not None


def test_build_device_collects_field_errors(device_form):
    device_form.update(device_id="MD 003", serial_number="DF-003", battery_level="150", model="")
    device_form["warranty_expiry"] = "2023-01-01"

    with pytest.raises(FormValidationError) as exc_info:
        device_service.build_device(device_form)

    assert set(exc_info.value.errors) == {"device_id", "serial_number", "battery_level", "model", "warranty_expiry"}


def test_add_device_returns_new_list(state, device_form):
    device = device_service.build_device(device_form)
    devices = device_service.add_device(state.devices, device)

    assert len(devices) == 3
    assert len(state.devices) == 2


def test_search_is_case_insensitive_substring(state):
    result = device_service.filter_devices(state.devices, DeviceFilters(search_term="vent"))
    assert [d.type for d in result] == ["Ventilator"]

    by_facility = device_service.filter_devices(state.devices, DeviceFilters(search_term="REGIONAL"))
    assert [d.device_id for d in by_facility] == ["MD-002"]


def test_filters_combine(state):
    filters = DeviceFilters(status="Maintenance", facility="Regional Medical Center")
    assert [d.device_id for d in device_service.filter_devices(state.devices, filters)] == ["MD-002"]

    filters = DeviceFilters(search_term="vent", status="Maintenance")
    assert device_service.filter_devices(state.devices, filters) == []


def test_qr_lookup(state):
    assert device_service.find_by_device_id(state.devices, "  MD-001 ").type == "Ventilator"
    assert device_service.find_by_device_id(state.devices, "MD-999") is None
    assert device_service.find_by_device_id(state.devices, "") is None


def test_status_and_battery_updates(state):
    device = state.devices[0]
    devices = device_service.update_device_status(state.devices, device.id, DeviceStatus.OFFLINE)
    devices = device_service.update_battery_level(devices, device.id, 12)

    updated = device_service.get_device(devices, device.id)
    assert updated.status == DeviceStatus.OFFLINE
    assert updated.battery_level == 12
    assert updated.updated_at is not None
    assert state.devices[0].status == DeviceStatus.ONLINE


def test_unknown_id_is_a_no_op(state):
    assert device_service.update_device_status(state.devices, "missing", DeviceStatus.OFFLINE) == state.devices
    assert device_service.get_device(state.devices, "missing") is None


def test_edit_device_validates_merged_record(state):
    device = state.devices[0]

    with pytest.raises(FormValidationError) as exc_info:
        device_service.edit_device(state.devices, device.id, {"serial_number": "bad serial!"})
    assert "serial_number" in exc_info.value.errors

    devices = device_service.edit_device(state.devices, device.id, {"location": "ICU Ward 2"})
    assert device_service.get_device(devices, device.id).location == "ICU Ward 2"


def test_delete_device_does_not_cascade(state):
    device = state.devices[0]
    devices = device_service.delete_device(state.devices, device.id)

    assert [d.device_id for d in devices] == ["MD-002"]
    assert any(c.device_id == device.device_id for c in state.contracts)


def test_status_counts_and_average_battery(state):
    assert device_service.status_counts(state.devices) == {"Online": 1, "Maintenance": 1}
    assert device_service.average_battery_level(state.devices) == 65
    assert device_service.average_battery_level([]) == 0
