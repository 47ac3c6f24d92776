import pytest
from fastapi.testclient import TestClient

from medtrack.api.deps import get_store
from medtrack.database import build_engine
from medtrack.main import app
from medtrack.seed import demo_state
from medtrack.services.storage_service import StateStorage
from medtrack.services.store import AppStore


@pytest.fixture
def storage(tmp_path):
    return StateStorage(build_engine(f"sqlite:///{tmp_path / 'state.db'}"))


@pytest.fixture
def state():
    return demo_state()


@pytest.fixture
def store(storage, state):
    return AppStore(storage=storage, state=state)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def device_form():
    return {
        "device_id": "MD-003",
        "type": "Defibrillator",
        "model": "ShockSafe 200",
        "serial_number": "DF003456",
        "facility_id": "FAC-001",
        "facility_name": "City General Hospital",
        "location": "Cardiology",
        "manufacturer": "MedTech Solutions",
        "battery_level": "72.5",
        "status": "Online",
        "purchase_date": "2024-03-01",
        "warranty_expiry": "2026-03-01",
    }


@pytest.fixture
def installation_form():
    return {
        "device_id": "MD-002",
        "device_type": "Patient Monitor",
        "facility_id": "FAC-002",
        "facility_name": "Regional Medical Center",
        "installation_date": "2025-02-10",
        "engineer_id": "ENG-001",
        "engineer_name": "John Smith",
    }


@pytest.fixture
def visit_form():
    return {
        "device_id": "MD-001",
        "device_type": "Ventilator",
        "facility_name": "City General Hospital",
        "visit_date": "2025-03-01",
        "engineer_id": "ENG-002",
        "engineer_name": "Mike Johnson",
        "purpose": "Calibration",
        "description": "Quarterly calibration",
        "time_spent": "90",
        "next_service_date": "2025-06-01",
    }


@pytest.fixture
def contract_form():
    return {
        "contract_number": "AMC-2025-010",
        "type": "AMC",
        "device_id": "MD-001",
        "device_type": "Ventilator",
        "facility_name": "City General Hospital",
        "start_date": "2025-01-01",
        "end_date": "2025-12-31",
        "value": 1200,
        "currency": "USD",
        "contact_person": "Dr. Sarah Johnson",
        "contact_email": "sarah.johnson@cityhospital.com",
        "vendor": "MedTech Solutions",
    }


@pytest.fixture
def facility_form():
    return {
        "name": "Lakeside Clinic",
        "type": "Clinic",
        "address": {
            "street": "9 Harbor Road",
            "city": "Lakeside",
            "state": "State",
            "zip_code": "24680",
            "country": "USA",
        },
        "contact_info": {"phone": "+1-555-0199", "email": "front@lakeside.org"},
    }
