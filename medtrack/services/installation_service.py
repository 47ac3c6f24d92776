"""
Installation checklist tracking.

An installation moves from In Progress to Completed once every checklist
item is ticked and training is recorded. The transition is a one-way latch:
unticking an item afterwards leaves the installation Completed.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from medtrack.schemas.common import FileRef, utcnow
from medtrack.schemas.installation import (
    CHECKLIST_ITEMS,
    Installation,
    InstallationChecklist,
    InstallationStatus,
)
from medtrack.services import validation
from medtrack.services.records import apply_updates, find_by_id, remove_by_id, replace_by_id

logger = logging.getLogger(__name__)

CHECKLIST_KEYS = [key for key, _ in CHECKLIST_ITEMS]

# Set only by the completion rule
DERIVED_FIELDS = {"status", "completion_date"}


def completion_percentage(installation: Installation) -> int:
    """Checklist items plus training as one extra step, rounded half up."""
    done = installation.checklist.completed_count() + (1 if installation.training_completed else 0)
    total = len(CHECKLIST_ITEMS) + 1
    return int(100 * done / total + 0.5)


def _apply_completion_rule(installation: Installation) -> Installation:
    if installation.status == InstallationStatus.COMPLETED:
        return installation
    if installation.checklist.all_done() and installation.training_completed:
        logger.info(f"[INSTALLATION] {installation.id} completed for device {installation.device_id}")
        return installation.model_copy(
            update={"status": InstallationStatus.COMPLETED, "completion_date": utcnow()}
        )
    return installation


# ─────────────────────── Reducers ───────────────────────

def build_installation(data: Dict[str, Any]) -> Installation:
    """Validate a submitted installation form and start it with an empty checklist."""
    validation.ensure_valid(validation.validate_installation_form(data))
    now = utcnow()
    fields = {key: value for key, value in data.items() if value not in (None, "") and key not in DERIVED_FIELDS}
    return Installation.model_validate(
        {
            **fields,
            "status": InstallationStatus.IN_PROGRESS,
            "checklist": InstallationChecklist(),
            "training_completed": False,
            "photos": [],
            "created_at": now,
            "updated_at": now,
        }
    )


def add_installation(installations: Sequence[Installation], installation: Installation) -> List[Installation]:
    return [*installations, installation]


def update_installation(
    installations: Sequence[Installation], installation_id: str, updates: Dict[str, Any]
) -> List[Installation]:
    """General edit. Status and completion date are never taken from *updates*."""
    allowed = {key: value for key, value in updates.items() if key not in DERIVED_FIELDS}
    return replace_by_id(
        installations,
        installation_id,
        lambda installation: _apply_completion_rule(apply_updates(installation, allowed)),
    )


def edit_installation(
    installations: Sequence[Installation], installation_id: str, updates: Dict[str, Any]
) -> List[Installation]:
    """Form edit: the merged record must pass the same checks as a new installation."""
    installation = find_by_id(installations, installation_id)
    if installation is None:
        return list(installations)
    merged = {**installation.model_dump(), **updates}
    validation.ensure_valid(validation.validate_installation_form(merged))
    return update_installation(installations, installation_id, updates)


def update_checklist_item(
    installations: Sequence[Installation], installation_id: str, item: str, value: bool
) -> List[Installation]:
    if item not in CHECKLIST_KEYS:
        raise ValueError(f"Unknown checklist item '{item}'")

    def _tick(installation: Installation) -> Installation:
        checklist = installation.checklist.model_copy(update={item: value})
        return _apply_completion_rule(apply_updates(installation, {"checklist": checklist}))

    return replace_by_id(installations, installation_id, _tick)


def update_training_status(
    installations: Sequence[Installation],
    installation_id: str,
    training_completed: bool,
    training_date: Optional[date] = None,
    trained_personnel: Optional[List[str]] = None,
) -> List[Installation]:
    updates: Dict[str, Any] = {"training_completed": training_completed}
    if training_date:
        updates["training_date"] = training_date
    if trained_personnel:
        updates["trained_personnel"] = [person.strip() for person in trained_personnel if person.strip()]
    return replace_by_id(
        installations,
        installation_id,
        lambda installation: _apply_completion_rule(apply_updates(installation, updates)),
    )


def add_installation_photo(
    installations: Sequence[Installation], installation_id: str, photo: Dict[str, Any]
) -> List[Installation]:
    def _attach(installation: Installation) -> Installation:
        ref = FileRef.model_validate({**photo, "upload_date": utcnow()})
        return apply_updates(installation, {"photos": [*installation.photos, ref]})

    return replace_by_id(installations, installation_id, _attach)


def remove_installation_photo(
    installations: Sequence[Installation], installation_id: str, photo_id: str
) -> List[Installation]:
    return replace_by_id(
        installations,
        installation_id,
        lambda installation: apply_updates(installation, {"photos": remove_by_id(installation.photos, photo_id)}),
    )


def delete_installation(installations: Sequence[Installation], installation_id: str) -> List[Installation]:
    return remove_by_id(installations, installation_id)


# ─────────────────────── Selectors ───────────────────────

def get_installation(installations: Sequence[Installation], installation_id: str) -> Optional[Installation]:
    return find_by_id(installations, installation_id)


def installations_for_device(installations: Sequence[Installation], device_id: str) -> List[Installation]:
    return [installation for installation in installations if installation.device_id == device_id]


def pending_installations(installations: Sequence[Installation]) -> List[Installation]:
    return [
        installation for installation in installations if installation.status != InstallationStatus.COMPLETED
    ]
