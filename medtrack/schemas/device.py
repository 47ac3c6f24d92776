from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from medtrack.schemas.common import CamelModel, new_id


class DeviceStatus(str, Enum):
    ONLINE = "Online"
    OFFLINE = "Offline"
    MAINTENANCE = "Maintenance"


class ContractCoverage(str, Enum):
    """Mirror of a device's AMC/CMC state, kept by hand on the device record."""
    ACTIVE = "Active"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"
    NOT_APPLICABLE = "Not Applicable"


DEVICE_TYPES = [
    "Ventilator",
    "Patient Monitor",
    "Defibrillator",
    "Infusion Pump",
    "ECG Machine",
    "Ultrasound",
    "X-Ray Machine",
    "CT Scanner",
    "MRI Machine",
    "Dialysis Machine",
    "Anesthesia Machine",
    "Blood Gas Analyzer",
    "Other",
]


class Device(CamelModel):
    id: str = Field(default_factory=new_id)
    device_id: str
    serial_number: Optional[str] = None
    type: str
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    location: Optional[str] = None
    status: DeviceStatus = DeviceStatus.ONLINE
    battery_level: Optional[int] = Field(None, ge=0, le=100)
    amc_status: Optional[ContractCoverage] = None
    cmc_status: Optional[ContractCoverage] = None
    last_service_date: Optional[date] = None
    last_installation_date: Optional[date] = None
    purchase_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ─────────────────────── Request payloads ───────────────────────

class DeviceCreate(CamelModel):
    """
    Device form as submitted. Fields stay loosely typed so that every
    problem is reported per field by validate_device_form instead of
    failing on the first bad value.
    """
    device_id: Optional[str] = None
    serial_number: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = DeviceStatus.ONLINE.value
    battery_level: Optional[Any] = None
    amc_status: Optional[str] = None
    cmc_status: Optional[str] = None
    last_service_date: Optional[str] = None
    last_installation_date: Optional[str] = None
    purchase_date: Optional[str] = None
    warranty_expiry: Optional[str] = None
    notes: Optional[str] = None


class DeviceUpdate(DeviceCreate):
    status: Optional[str] = None


class DeviceStatusUpdate(CamelModel):
    status: DeviceStatus


class BatteryLevelUpdate(CamelModel):
    battery_level: int = Field(..., ge=0, le=100)
