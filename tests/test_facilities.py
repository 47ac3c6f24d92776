from datetime import date

import pytest

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.facility import FacilityStatus
from medtrack.services import facility_service


def test_build_facility_assigns_next_id(state, facility_form):
    facility = facility_service.build_facility(state.facilities, facility_form)

    assert facility.id == "FAC-003"
    assert facility.status == FacilityStatus.ACTIVE
    assert facility.device_count == 0
    assert facility.address.zip_code == "24680"


def test_next_id_is_above_highest_after_delete(state):
    remaining = facility_service.delete_facility(state.facilities, "FAC-001")
    assert facility_service.next_facility_id(remaining) == "FAC-003"
    assert facility_service.next_facility_id([]) == "FAC-001"


def test_build_facility_validation(state, facility_form):
    facility_form["address"] = {"street": "", "city": "", "zip_code": ""}
    facility_form["contact_info"] = {"email": "front-desk", "phone": "12ab"}
    facility_form["primary_contact"] = {"name": "Ann", "email": "ann@"}

    with pytest.raises(FormValidationError) as exc_info:
        facility_service.build_facility(state.facilities, facility_form)

    assert set(exc_info.value.errors) == {"street", "city", "zip_code", "email", "phone", "primary_email"}


def test_departments_have_no_duplicates(state):
    facilities = facility_service.add_facility_department(state.facilities, "FAC-002", "Imaging")
    facilities = facility_service.add_facility_department(facilities, "FAC-002", "Pharmacy")
    assert facility_service.get_facility(facilities, "FAC-002").departments == [
        "Emergency Room",
        "Outpatient",
        "Laboratory",
        "Imaging",
        "Pharmacy",
    ]

    facilities = facility_service.remove_facility_department(facilities, "FAC-002", "Outpatient")
    assert "Outpatient" not in facility_service.get_facility(facilities, "FAC-002").departments


def test_counters_and_status(state):
    facilities = facility_service.update_facility_device_count(state.facilities, "FAC-001", 16)
    facilities = facility_service.update_facility_last_visit(facilities, "FAC-001", date(2025, 5, 2))
    facilities = facility_service.update_facility_status(facilities, "FAC-002", FacilityStatus.INACTIVE)

    city = facility_service.get_facility(facilities, "FAC-001")
    assert (city.device_count, city.last_visit_date) == (16, date(2025, 5, 2))
    assert [f.id for f in facility_service.active_facilities(facilities)] == ["FAC-001"]


def test_contract_windows(state):
    today = date(2025, 12, 15)
    expired = facility_service.facilities_with_expired_contracts(state.facilities, today)
    expiring = facility_service.facilities_with_expiring_contracts(state.facilities, 30, today)

    assert [f.id for f in expired] == ["FAC-002"]
    assert [f.id for f in expiring] == ["FAC-001"]


def test_edit_facility(state):
    facilities = facility_service.edit_facility(state.facilities, "FAC-001", {"notes": "New wing opened"})
    assert facility_service.get_facility(facilities, "FAC-001").notes == "New wing opened"

    with pytest.raises(FormValidationError):
        facility_service.edit_facility(state.facilities, "FAC-001", {"name": ""})


def test_options_and_type(state):
    assert facility_service.facility_options(state.facilities) == [
        {"value": "FAC-001", "label": "City General Hospital"},
        {"value": "FAC-002", "label": "Regional Medical Center"},
    ]
    assert [f.id for f in facility_service.facilities_by_type(state.facilities, "Hospital")] == ["FAC-001"]
