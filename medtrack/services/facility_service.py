"""
Facility records. Device counts are informational and maintained by hand.
"""
import logging
import re
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from medtrack.schemas.common import utcnow
from medtrack.schemas.facility import Facility, FacilityStatus
from medtrack.services import validation
from medtrack.services.records import apply_updates, find_by_id, remove_by_id, replace_by_id

logger = logging.getLogger(__name__)

FACILITY_ID_RE = re.compile(r"^FAC-(\d+)$")


def next_facility_id(facilities: Sequence[Facility]) -> str:
    """FAC-NNN, one above the highest number in use."""
    numbers = [
        int(match.group(1)) for match in (FACILITY_ID_RE.match(facility.id) for facility in facilities) if match
    ]
    return f"FAC-{max(numbers, default=0) + 1:03d}"


def build_facility(facilities: Sequence[Facility], data: Dict[str, Any]) -> Facility:
    validation.ensure_valid(validation.validate_facility_form(data))
    now = utcnow()
    return Facility.model_validate(
        {
            **data,
            "id": next_facility_id(facilities),
            "status": FacilityStatus.ACTIVE,
            "device_count": 0,
            "last_visit_date": None,
            "created_at": now,
            "updated_at": now,
        }
    )


def add_facility(facilities: Sequence[Facility], facility: Facility) -> List[Facility]:
    logger.info(f"[FACILITY] Added {facility.id} '{facility.name}'")
    return [*facilities, facility]


def update_facility(facilities: Sequence[Facility], facility_id: str, updates: Dict[str, Any]) -> List[Facility]:
    return replace_by_id(facilities, facility_id, lambda facility: apply_updates(facility, updates))


def edit_facility(facilities: Sequence[Facility], facility_id: str, updates: Dict[str, Any]) -> List[Facility]:
    """Form edit: the merged record must pass the same checks as a new facility."""
    facility = find_by_id(facilities, facility_id)
    if facility is None:
        return list(facilities)
    merged = {**facility.model_dump(), **updates}
    validation.ensure_valid(validation.validate_facility_form(merged))
    return update_facility(facilities, facility_id, updates)


def update_facility_device_count(facilities: Sequence[Facility], facility_id: str, count: int) -> List[Facility]:
    return update_facility(facilities, facility_id, {"device_count": count})


def update_facility_last_visit(facilities: Sequence[Facility], facility_id: str, visit_date: date) -> List[Facility]:
    return update_facility(facilities, facility_id, {"last_visit_date": visit_date})


def add_facility_department(facilities: Sequence[Facility], facility_id: str, department: str) -> List[Facility]:
    def _add(facility: Facility) -> Facility:
        if department in facility.departments:
            return facility
        return apply_updates(facility, {"departments": [*facility.departments, department]})

    return replace_by_id(facilities, facility_id, _add)


def remove_facility_department(facilities: Sequence[Facility], facility_id: str, department: str) -> List[Facility]:
    return replace_by_id(
        facilities,
        facility_id,
        lambda facility: apply_updates(
            facility, {"departments": [dept for dept in facility.departments if dept != department]}
        ),
    )


def update_facility_status(facilities: Sequence[Facility], facility_id: str, status: FacilityStatus) -> List[Facility]:
    return update_facility(facilities, facility_id, {"status": status})


def delete_facility(facilities: Sequence[Facility], facility_id: str) -> List[Facility]:
    # Devices keep their facility_id/facility_name
    return remove_by_id(facilities, facility_id)


# ─────────────────────── Selectors ───────────────────────

def get_facility(facilities: Sequence[Facility], facility_id: str) -> Optional[Facility]:
    return find_by_id(facilities, facility_id)


def active_facilities(facilities: Sequence[Facility]) -> List[Facility]:
    return [facility for facility in facilities if facility.status == FacilityStatus.ACTIVE]


def facilities_by_type(facilities: Sequence[Facility], facility_type: str) -> List[Facility]:
    return [facility for facility in facilities if facility.type == facility_type]


def facilities_with_expired_contracts(facilities: Sequence[Facility], today: Optional[date] = None) -> List[Facility]:
    today = today or date.today()
    return [
        facility
        for facility in facilities
        if facility.contract_end_date is not None and facility.contract_end_date < today
    ]


def facilities_with_expiring_contracts(
    facilities: Sequence[Facility], days_ahead: int = 30, today: Optional[date] = None
) -> List[Facility]:
    today = today or date.today()
    horizon = today + timedelta(days=days_ahead)
    return [
        facility
        for facility in facilities
        if facility.contract_end_date is not None and today <= facility.contract_end_date <= horizon
    ]


def facility_options(facilities: Sequence[Facility]) -> List[Dict[str, str]]:
    return [{"value": facility.id, "label": facility.name} for facility in facilities]
