from datetime import date

import pytest

from medtrack.core.exceptions import FormValidationError
from medtrack.schemas.installation import InstallationStatus
from medtrack.services import installation_service
from medtrack.services.installation_service import CHECKLIST_KEYS


@pytest.fixture
def started(installation_form):
    installation = installation_service.build_installation(installation_form)
    return installation_service.add_installation([], installation), installation.id


def tick_all(installations, installation_id):
    for key in CHECKLIST_KEYS:
        installations = installation_service.update_checklist_item(installations, installation_id, key, True)
    return installations


def test_new_installation_starts_in_progress(started):
    installations, installation_id = started
    installation = installation_service.get_installation(installations, installation_id)

    assert installation.status == InstallationStatus.IN_PROGRESS
    assert installation.checklist.completed_count() == 0
    assert installation.training_completed is False
    assert installation_service.completion_percentage(installation) == 0


def test_full_checklist_without_training_stays_in_progress(started):
    installations, installation_id = started
    installations = tick_all(installations, installation_id)
    installation = installation_service.get_installation(installations, installation_id)

    assert installation_service.completion_percentage(installation) == 89
    assert installation.status == InstallationStatus.IN_PROGRESS
    assert installation.completion_date is None


def test_training_completes_the_installation(started):
    installations, installation_id = started
    installations = tick_all(installations, installation_id)
    installations = installation_service.update_training_status(
        installations, installation_id, True, date(2025, 2, 11), [" Nurse Mary Wilson ", ""]
    )
    installation = installation_service.get_installation(installations, installation_id)

    assert installation.status == InstallationStatus.COMPLETED
    assert installation.completion_date is not None
    assert installation.training_date == date(2025, 2, 11)
    assert installation.trained_personnel == ["Nurse Mary Wilson"]
    assert installation_service.completion_percentage(installation) == 100


def test_training_first_then_last_item_completes(started):
    installations, installation_id = started
    installations = installation_service.update_training_status(installations, installation_id, True)
    for key in CHECKLIST_KEYS[:-1]:
        installations = installation_service.update_checklist_item(installations, installation_id, key, True)
    assert installation_service.get_installation(installations, installation_id).status == InstallationStatus.IN_PROGRESS

    installations = installation_service.update_checklist_item(installations, installation_id, CHECKLIST_KEYS[-1], True)
    assert installation_service.get_installation(installations, installation_id).status == InstallationStatus.COMPLETED


def test_completion_is_a_one_way_latch(started):
    installations, installation_id = started
    installations = tick_all(installations, installation_id)
    installations = installation_service.update_training_status(installations, installation_id, True)
    completed_at = installation_service.get_installation(installations, installation_id).completion_date

    installations = installation_service.update_checklist_item(installations, installation_id, "calibration", False)
    installation = installation_service.get_installation(installations, installation_id)

    assert installation.status == InstallationStatus.COMPLETED
    assert installation.completion_date == completed_at
    assert installation.checklist.calibration is False


def test_general_update_cannot_set_status(started):
    installations, installation_id = started
    installations = installation_service.update_installation(
        installations, installation_id, {"status": "Completed", "notes": "Waiting on network drop"}
    )
    installation = installation_service.get_installation(installations, installation_id)

    assert installation.status == InstallationStatus.IN_PROGRESS
    assert installation.notes == "Waiting on network drop"


def test_unknown_checklist_item(started):
    installations, installation_id = started
    with pytest.raises(ValueError):
        installation_service.update_checklist_item(installations, installation_id, "painting", True)


def test_build_installation_requires_engineer(installation_form):
    installation_form.update(engineer_id="", installation_date="10/02/2025")

    with pytest.raises(FormValidationError) as exc_info:
        installation_service.build_installation(installation_form)

    assert set(exc_info.value.errors) == {"engineer_id", "installation_date"}


def test_photos_attach_and_detach(started):
    installations, installation_id = started
    installations = installation_service.add_installation_photo(
        installations, installation_id, {"filename": "rack.jpg", "description": "Mounted on rack"}
    )
    photo = installation_service.get_installation(installations, installation_id).photos[0]
    assert photo.filename == "rack.jpg"

    installations = installation_service.remove_installation_photo(installations, installation_id, photo.id)
    assert installation_service.get_installation(installations, installation_id).photos == []


def test_selectors(state):
    assert len(installation_service.installations_for_device(state.installations, "MD-001")) == 1
    assert installation_service.pending_installations(state.installations) == []
