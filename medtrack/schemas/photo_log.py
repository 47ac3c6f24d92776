from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from medtrack.schemas.common import CamelModel, new_id


class PhotoCategory(str, Enum):
    CONDITION_CHECK = "Condition Check"
    ISSUE_DOCUMENTATION = "Issue Documentation"
    INSTALLATION = "Installation"
    SERVICE_VISIT = "Service Visit"
    MAINTENANCE = "Maintenance"
    GENERAL = "General"


class AlertLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


ALLOWED_MIME_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/gif"]
MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class PhotoMetadata(CamelModel):
    # Cameras report arbitrary extra EXIF-style keys
    model_config = ConfigDict(extra="allow")

    camera: Optional[str] = None
    timestamp: Optional[datetime] = None
    gps_location: Optional[str] = None


class PhotoLog(CamelModel):
    id: str = Field(default_factory=new_id)
    device_id: Optional[str] = None
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    filename: str
    original_name: Optional[str] = None
    description: Optional[str] = None
    category: PhotoCategory = PhotoCategory.GENERAL
    upload_date: Optional[datetime] = None
    uploaded_by: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)  # bytes
    mime_type: Optional[str] = None
    tags: List[str] = []
    location: Optional[str] = None
    notes: Optional[str] = None
    is_alert: bool = False
    alert_level: Optional[AlertLevel] = None
    related_service_visit_id: Optional[str] = None
    related_installation_id: Optional[str] = None
    metadata: PhotoMetadata = Field(default_factory=PhotoMetadata)


# ─────────────────────── Request payloads ───────────────────────

class PhotoLogCreate(CamelModel):
    device_id: Optional[str] = None
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    filename: str = Field(..., min_length=1)
    original_name: Optional[str] = None
    description: Optional[str] = None
    category: PhotoCategory = PhotoCategory.GENERAL
    uploaded_by: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = None
    tags: Optional[List[str]] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    is_alert: bool = False
    alert_level: Optional[AlertLevel] = None
    related_service_visit_id: Optional[str] = None
    related_installation_id: Optional[str] = None
    metadata: Optional[PhotoMetadata] = None


class PhotoLogUpdate(CamelModel):
    description: Optional[str] = None
    category: Optional[PhotoCategory] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    related_service_visit_id: Optional[str] = None
    related_installation_id: Optional[str] = None


class PhotoTag(CamelModel):
    tag: str = Field(..., min_length=1)


class PhotoAlertUpdate(CamelModel):
    is_alert: bool
    alert_level: Optional[AlertLevel] = None


class BulkDeleteRequest(CamelModel):
    photo_ids: List[str]
