"""
Service visit log: scheduling, work and parts records, completion sign-off.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from medtrack.schemas.common import FileRef, utcnow
from medtrack.schemas.filters import ServiceVisitFilters
from medtrack.schemas.service_visit import PartUsed, ServiceVisit, VisitPurpose, VisitStatus
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

# Written only by complete_service_visit
COMPLETION_FIELDS = {"customer_signature", "completion_date"}


def build_service_visit(data: Dict[str, Any]) -> ServiceVisit:
    """Validate a submitted visit form and schedule it with empty work records."""
    validation.ensure_valid(validation.validate_service_visit_form(data))
    now = utcnow()
    fields = {
        key: value
        for key, value in data.items()
        if value not in (None, "") and key not in COMPLETION_FIELDS and key != "status"
    }
    return ServiceVisit.model_validate(
        {
            **fields,
            "status": VisitStatus.SCHEDULED,
            "work_performed": [],
            "parts_used": [],
            "time_spent": 0,
            "photos": [],
            "attachments": [],
            "created_at": now,
            "updated_at": now,
        }
    )


def add_service_visit(visits: Sequence[ServiceVisit], visit: ServiceVisit) -> List[ServiceVisit]:
    logger.info(f"[SERVICE] Scheduled {visit.purpose.value} visit for device {visit.device_id}")
    return [*visits, visit]


def update_service_visit(visits: Sequence[ServiceVisit], visit_id: str, updates: Dict[str, Any]) -> List[ServiceVisit]:
    """General edit. Completion only happens through complete_service_visit."""
    allowed = {key: value for key, value in updates.items() if key not in COMPLETION_FIELDS}
    if allowed.get("status") == VisitStatus.COMPLETED:
        logger.warning(f"[SERVICE] Ignoring status 'Completed' on edit of {visit_id}; use completion")
        allowed.pop("status")
    return replace_by_id(visits, visit_id, lambda visit: apply_updates(visit, allowed))


def edit_service_visit(visits: Sequence[ServiceVisit], visit_id: str, updates: Dict[str, Any]) -> List[ServiceVisit]:
    """Form edit: the merged record must pass the same checks as a new visit."""
    visit = find_by_id(visits, visit_id)
    if visit is None:
        return list(visits)
    merged = {**visit.model_dump(), **updates}
    validation.ensure_valid(validation.validate_service_visit_form(merged))
    return update_service_visit(visits, visit_id, updates)


def add_work_performed(visits: Sequence[ServiceVisit], visit_id: str, work: str) -> List[ServiceVisit]:
    return replace_by_id(
        visits, visit_id, lambda visit: apply_updates(visit, {"work_performed": [*visit.work_performed, work]})
    )


def _without_index(items: Sequence[Any], index: int) -> List[Any]:
    if not 0 <= index < len(items):
        return list(items)
    return [item for position, item in enumerate(items) if position != index]


def remove_work_performed(visits: Sequence[ServiceVisit], visit_id: str, index: int) -> List[ServiceVisit]:
    return replace_by_id(
        visits,
        visit_id,
        lambda visit: apply_updates(visit, {"work_performed": _without_index(visit.work_performed, index)}),
    )


def add_part_used(visits: Sequence[ServiceVisit], visit_id: str, part: Dict[str, Any]) -> List[ServiceVisit]:
    new_part = PartUsed.model_validate(part)
    return replace_by_id(
        visits, visit_id, lambda visit: apply_updates(visit, {"parts_used": [*visit.parts_used, new_part]})
    )


def remove_part_used(visits: Sequence[ServiceVisit], visit_id: str, index: int) -> List[ServiceVisit]:
    return replace_by_id(
        visits,
        visit_id,
        lambda visit: apply_updates(visit, {"parts_used": _without_index(visit.parts_used, index)}),
    )


def _add_file(visits: Sequence[ServiceVisit], visit_id: str, field: str, payload: Dict[str, Any]) -> List[ServiceVisit]:
    def _attach(visit: ServiceVisit) -> ServiceVisit:
        ref = FileRef.model_validate({**payload, "upload_date": utcnow()})
        return apply_updates(visit, {field: [*getattr(visit, field), ref]})

    return replace_by_id(visits, visit_id, _attach)


def _remove_file(visits: Sequence[ServiceVisit], visit_id: str, field: str, file_id: str) -> List[ServiceVisit]:
    return replace_by_id(
        visits, visit_id, lambda visit: apply_updates(visit, {field: remove_by_id(getattr(visit, field), file_id)})
    )


def add_service_photo(visits: Sequence[ServiceVisit], visit_id: str, photo: Dict[str, Any]) -> List[ServiceVisit]:
    return _add_file(visits, visit_id, "photos", photo)


def remove_service_photo(visits: Sequence[ServiceVisit], visit_id: str, photo_id: str) -> List[ServiceVisit]:
    return _remove_file(visits, visit_id, "photos", photo_id)


def add_service_attachment(visits: Sequence[ServiceVisit], visit_id: str, attachment: Dict[str, Any]) -> List[ServiceVisit]:
    return _add_file(visits, visit_id, "attachments", attachment)


def remove_service_attachment(visits: Sequence[ServiceVisit], visit_id: str, attachment_id: str) -> List[ServiceVisit]:
    return _remove_file(visits, visit_id, "attachments", attachment_id)


def complete_service_visit(
    visits: Sequence[ServiceVisit],
    visit_id: str,
    customer_signature: str,
    completion_notes: Optional[str] = None,
) -> List[ServiceVisit]:
    updates: Dict[str, Any] = {
        "status": VisitStatus.COMPLETED,
        "customer_signature": customer_signature,
        "completion_date": utcnow(),
    }
    if completion_notes:
        updates["notes"] = completion_notes
    logger.info(f"[SERVICE] Visit {visit_id} signed off by '{customer_signature}'")
    return replace_by_id(visits, visit_id, lambda visit: apply_updates(visit, updates))


def delete_service_visit(visits: Sequence[ServiceVisit], visit_id: str) -> List[ServiceVisit]:
    return remove_by_id(visits, visit_id)


# ─────────────────────── Selectors ───────────────────────

def get_service_visit(visits: Sequence[ServiceVisit], visit_id: str) -> Optional[ServiceVisit]:
    return find_by_id(visits, visit_id)


def visits_for_device(visits: Sequence[ServiceVisit], device_id: str) -> List[ServiceVisit]:
    return [visit for visit in visits if visit.device_id == device_id]


def pending_visits(visits: Sequence[ServiceVisit]) -> List[ServiceVisit]:
    return [visit for visit in visits if visit.status != VisitStatus.COMPLETED]


def visits_by_purpose(visits: Sequence[ServiceVisit], purpose: VisitPurpose) -> List[ServiceVisit]:
    return [visit for visit in visits if visit.purpose == purpose]


def filter_visits(visits: Sequence[ServiceVisit], filters: ServiceVisitFilters) -> List[ServiceVisit]:
    return [
        visit
        for visit in visits
        if matches_search(
            filters.search_term, visit.device_id, visit.device_type, visit.facility_name, visit.engineer_name
        )
        and matches_choice(filters.status, visit.status)
        and matches_choice(filters.purpose, visit.purpose)
        and matches_choice(filters.device_id, visit.device_id)
    ]
