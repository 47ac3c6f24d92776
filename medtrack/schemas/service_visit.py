from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field

from medtrack.schemas.common import CamelModel, FileRef, new_id


class VisitPurpose(str, Enum):
    PREVENTIVE = "Preventive"
    BREAKDOWN = "Breakdown"
    INSTALLATION = "Installation"
    CALIBRATION = "Calibration"
    UPGRADE = "Upgrade"


class VisitStatus(str, Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PartUsed(CamelModel):
    name: str
    part_number: Optional[str] = None
    quantity: int = Field(1, ge=0)


class ServiceVisit(CamelModel):
    id: str = Field(default_factory=new_id)
    device_id: str
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    visit_date: Optional[date] = None
    engineer_id: Optional[str] = None
    engineer_name: Optional[str] = None
    purpose: VisitPurpose = VisitPurpose.PREVENTIVE
    status: VisitStatus = VisitStatus.SCHEDULED
    description: Optional[str] = None
    work_performed: List[str] = []
    parts_used: List[PartUsed] = []
    time_spent: int = 0  # minutes
    next_service_date: Optional[date] = None
    photos: List[FileRef] = []
    attachments: List[FileRef] = []
    notes: Optional[str] = None
    customer_signature: Optional[str] = None
    completion_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ─────────────────────── Request payloads ───────────────────────

class ServiceVisitCreate(CamelModel):
    device_id: Optional[str] = None
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    visit_date: Optional[str] = None
    engineer_id: Optional[str] = None
    engineer_name: Optional[str] = None
    purpose: Optional[str] = VisitPurpose.PREVENTIVE.value
    description: Optional[str] = None
    time_spent: Optional[Any] = None
    next_service_date: Optional[str] = None
    notes: Optional[str] = None


class ServiceVisitUpdate(ServiceVisitCreate):
    purpose: Optional[str] = None
    status: Optional[VisitStatus] = None


class WorkItem(CamelModel):
    work: str = Field(..., min_length=1)


class VisitCompletion(CamelModel):
    customer_signature: str = Field(..., min_length=1)
    completion_notes: Optional[str] = None
