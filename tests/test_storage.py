import json
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from medtrack.core.exceptions import FormValidationError
from medtrack.models.snapshot import StateSnapshot
from medtrack.schemas.contract import ContractStatus
from medtrack.schemas.device import DeviceStatus
from medtrack.schemas.state import AppState
from medtrack.services import device_service
from medtrack.services.store import AppStore, reduce_state


def write_raw(storage, payload):
    session = storage.session_factory()
    try:
        session.merge(StateSnapshot(key=storage.key, payload=payload))
        session.commit()
    finally:
        session.close()


def read_raw(storage):
    session = storage.session_factory()
    try:
        return json.loads(session.get(StateSnapshot, storage.key).payload)
    finally:
        session.close()


def test_load_without_snapshot_returns_none(storage):
    assert storage.load() is None


def test_round_trip(storage, state):
    assert storage.save(state) is True
    loaded = storage.load()

    assert loaded.model_dump(mode="json") == state.model_dump(mode="json")


def test_persisted_layout_uses_camel_case(storage, state):
    storage.save(state)
    raw = read_raw(storage)

    assert set(raw) == {"devices", "installations", "serviceVisits", "contracts", "photoLogs", "facilities"}
    assert raw["devices"][0]["deviceId"] == "MD-001"
    assert raw["facilities"][0]["address"]["zipCode"] == "12345"


def test_save_overwrites_previous_snapshot(storage, state):
    storage.save(state)
    storage.save(AppState())
    assert storage.load() == AppState()


@pytest.mark.parametrize("payload", ["{not json", '{"devices": [{"status": "Exploded"}]}'])
def test_corrupt_snapshot_is_ignored(storage, payload):
    write_raw(storage, payload)
    assert storage.load() is None


def test_store_falls_back_to_demo_state(storage):
    write_raw(storage, "{not json")
    store = AppStore.load(storage, today=date(2024, 1, 20))

    assert [d.device_id for d in store.state.devices] == ["MD-001", "MD-002"]


def test_store_load_refreshes_contract_statuses(storage, state):
    storage.save(state)
    store = AppStore.load(storage, today=date(2024, 7, 20))

    statuses = {c.contract_number: c.status for c in store.state.contracts}
    assert statuses == {"AMC-2024-001": ContractStatus.ACTIVE, "CMC-2024-002": ContractStatus.EXPIRING_SOON}

    store = AppStore.load(storage, today=date(2025, 1, 5))
    assert {c.status for c in store.state.contracts} == {ContractStatus.EXPIRED}


def test_dispatch_persists(store, storage):
    device = store.state.devices[0]
    store.dispatch("devices", device_service.update_device_status, device.id, DeviceStatus.OFFLINE)

    reloaded = storage.load()
    assert device_service.get_device(reloaded.devices, device.id).status == DeviceStatus.OFFLINE


def test_save_failure_does_not_block_mutation(store, monkeypatch):
    def broken_session():
        raise OperationalError("UPDATE state_snapshots", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store.storage, "session_factory", broken_session)
    device = store.state.devices[0]

    assert store.storage.save(store.state) is False
    state = store.dispatch("devices", device_service.update_battery_level, device.id, 10)
    assert device_service.get_device(state.devices, device.id).battery_level == 10


def test_rejected_form_leaves_state_unchanged(store):
    before = store.state

    with pytest.raises(FormValidationError):
        store.dispatch("devices", lambda devices: device_service.add_device(devices, device_service.build_device({})))

    assert store.state is before


def test_reduce_state_unknown_collection(state):
    with pytest.raises(ValueError):
        reduce_state(state, "patients", lambda items: items)


def test_reduce_state_touches_one_collection(state):
    updated = reduce_state(state, "devices", lambda devices: devices[:1])
    assert len(updated.devices) == 1
    assert updated.contracts is state.contracts
    assert len(state.devices) == 2
