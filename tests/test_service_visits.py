import pytest

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.filters import ServiceVisitFilters
from medtrack.schemas.service_visit import VisitPurpose, VisitStatus
from medtrack.services import service_visit_service


@pytest.fixture
def scheduled(visit_form):
    visit = service_visit_service.build_service_visit(visit_form)
    return service_visit_service.add_service_visit([], visit), visit.id


def test_new_visit_is_scheduled_and_empty(scheduled):
    visits, visit_id = scheduled
    visit = service_visit_service.get_service_visit(visits, visit_id)

    assert visit.status == VisitStatus.SCHEDULED
    assert visit.purpose == VisitPurpose.CALIBRATION
    assert visit.work_performed == []
    assert visit.parts_used == []
    assert visit.time_spent == 0


def test_next_service_must_follow_visit(visit_form):
    visit_form["next_service_date"] = "2025-01-01"

    with pytest.raises(FormValidationError) as exc_info:
        service_visit_service.build_service_visit(visit_form)

    assert set(exc_info.value.errors) == {"next_service_date"}


def test_unknown_purpose_is_rejected(visit_form):
    visit_form["purpose"] = "Cleaning"
    with pytest.raises(FormValidationError) as exc_info:
        service_visit_service.build_service_visit(visit_form)
    assert "purpose" in exc_info.value.errors


def test_edit_cannot_complete(scheduled):
    visits, visit_id = scheduled
    visits = service_visit_service.update_service_visit(
        visits,
        visit_id,
        {"status": VisitStatus.COMPLETED, "customer_signature": "Someone", "notes": "Started"},
    )
    visit = service_visit_service.get_service_visit(visits, visit_id)

    assert visit.status == VisitStatus.SCHEDULED
    assert visit.customer_signature is None
    assert visit.notes == "Started"

    visits = service_visit_service.update_service_visit(visits, visit_id, {"status": VisitStatus.IN_PROGRESS})
    assert service_visit_service.get_service_visit(visits, visit_id).status == VisitStatus.IN_PROGRESS


def test_complete_service_visit(scheduled):
    visits, visit_id = scheduled
    visits = service_visit_service.complete_service_visit(visits, visit_id, "Dr. Sarah Johnson", "All good")
    visit = service_visit_service.get_service_visit(visits, visit_id)

    assert visit.status == VisitStatus.COMPLETED
    assert visit.customer_signature == "Dr. Sarah Johnson"
    assert visit.completion_date is not None
    assert visit.notes == "All good"


def test_work_log(scheduled):
    visits, visit_id = scheduled
    visits = service_visit_service.add_work_performed(visits, visit_id, "Flow sensor calibration")
    visits = service_visit_service.add_work_performed(visits, visit_id, "Alarm test")
    visits = service_visit_service.remove_work_performed(visits, visit_id, 0)
    assert service_visit_service.get_service_visit(visits, visit_id).work_performed == ["Alarm test"]

    unchanged = service_visit_service.remove_work_performed(visits, visit_id, 5)
    assert service_visit_service.get_service_visit(unchanged, visit_id).work_performed == ["Alarm test"]


def test_parts_used(scheduled):
    visits, visit_id = scheduled
    visits = service_visit_service.add_part_used(
        visits, visit_id, {"name": "Air Filter", "part_number": "AF-001", "quantity": 2}
    )
    [part] = service_visit_service.get_service_visit(visits, visit_id).parts_used
    assert (part.name, part.quantity) == ("Air Filter", 2)

    visits = service_visit_service.remove_part_used(visits, visit_id, 0)
    assert service_visit_service.get_service_visit(visits, visit_id).parts_used == []


def test_photos_and_attachments(scheduled):
    visits, visit_id = scheduled
    visits = service_visit_service.add_service_photo(visits, visit_id, {"filename": "before.jpg"})
    visits = service_visit_service.add_service_attachment(visits, visit_id, {"filename": "report.pdf"})
    visit = service_visit_service.get_service_visit(visits, visit_id)
    assert [p.filename for p in visit.photos] == ["before.jpg"]
    assert [a.filename for a in visit.attachments] == ["report.pdf"]

    visits = service_visit_service.remove_service_photo(visits, visit_id, visit.photos[0].id)
    visits = service_visit_service.remove_service_attachment(visits, visit_id, visit.attachments[0].id)
    visit = service_visit_service.get_service_visit(visits, visit_id)
    assert visit.photos == [] and visit.attachments == []


def test_filters_and_selectors(state):
    visits = state.service_visits

    breakdowns = service_visit_service.filter_visits(visits, ServiceVisitFilters(purpose="Breakdown"))
    assert [v.device_id for v in breakdowns] == ["MD-002"]

    by_engineer = service_visit_service.filter_visits(visits, ServiceVisitFilters(search_term="mike"))
    assert [v.device_id for v in by_engineer] == ["MD-001"]

    assert [v.device_id for v in service_visit_service.pending_visits(visits)] == ["MD-002"]
    assert len(service_visit_service.visits_for_device(visits, "MD-001")) == 1
    assert len(service_visit_service.visits_by_purpose(visits, VisitPurpose.PREVENTIVE)) == 1
