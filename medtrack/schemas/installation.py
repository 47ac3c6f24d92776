from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from medtrack.schemas.common import CamelModel, FileRef, new_id


class InstallationStatus(str, Enum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


# Ordered (field, label) pairs; the field names match InstallationChecklist
CHECKLIST_ITEMS = [
    ("unboxing_photos", "Unboxing Photos Taken"),
    ("device_inspection", "Device Physical Inspection"),
    ("power_connection", "Power Connection & Testing"),
    ("network_setup", "Network Setup & Configuration"),
    ("calibration", "Device Calibration"),
    ("user_training", "User Training Completed"),
    ("documentation", "Documentation Handover"),
    ("final_testing", "Final Testing & Validation"),
]


class InstallationChecklist(CamelModel):
    unboxing_photos: bool = False
    device_inspection: bool = False
    power_connection: bool = False
    network_setup: bool = False
    calibration: bool = False
    user_training: bool = False
    documentation: bool = False
    final_testing: bool = False

    def completed_count(self) -> int:
        return sum(1 for key, _ in CHECKLIST_ITEMS if getattr(self, key))

    def all_done(self) -> bool:
        return self.completed_count() == len(CHECKLIST_ITEMS)


class Installation(CamelModel):
    id: str = Field(default_factory=new_id)
    device_id: str
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    installation_date: Optional[date] = None
    engineer_id: Optional[str] = None
    engineer_name: Optional[str] = None
    status: InstallationStatus = InstallationStatus.IN_PROGRESS
    checklist: InstallationChecklist = Field(default_factory=InstallationChecklist)
    training_completed: bool = False
    training_date: Optional[date] = None
    trained_personnel: List[str] = []
    photos: List[FileRef] = []
    notes: Optional[str] = None
    completion_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ─────────────────────── Request payloads ───────────────────────

class InstallationCreate(CamelModel):
    device_id: Optional[str] = None
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    installation_date: Optional[str] = None
    engineer_id: Optional[str] = None
    engineer_name: Optional[str] = None
    notes: Optional[str] = None


class InstallationUpdate(InstallationCreate):
    checklist: Optional[InstallationChecklist] = None
    training_completed: Optional[bool] = None
    training_date: Optional[str] = None
    trained_personnel: Optional[List[str]] = None


class ChecklistItemUpdate(CamelModel):
    item: str
    value: bool


class TrainingUpdate(CamelModel):
    training_completed: bool
    training_date: Optional[date] = None
    trained_personnel: Optional[List[str]] = None
