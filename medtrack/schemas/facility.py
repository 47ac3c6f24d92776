from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from medtrack.schemas.common import CamelModel


class FacilityStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class ContactInfo(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class Contact(CamelModel):
    name: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class OperatingHours(CamelModel):
    weekdays: Optional[str] = None
    weekends: Optional[str] = None
    holidays: Optional[str] = None


class Facility(CamelModel):
    id: str
    name: str
    type: Optional[str] = None
    address: Address = Field(default_factory=Address)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    primary_contact: Contact = Field(default_factory=Contact)
    technical_contact: Contact = Field(default_factory=Contact)
    departments: List[str] = []
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    notes: Optional[str] = None
    status: FacilityStatus = FacilityStatus.ACTIVE
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    device_count: int = 0
    last_visit_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ─────────────────────── Request payloads ───────────────────────

class FacilityCreate(CamelModel):
    name: Optional[str] = None
    type: Optional[str] = None
    address: Address = Field(default_factory=Address)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    primary_contact: Contact = Field(default_factory=Contact)
    technical_contact: Contact = Field(default_factory=Contact)
    departments: List[str] = []
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    notes: Optional[str] = None
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None


class FacilityUpdate(CamelModel):
    name: Optional[str] = None
    type: Optional[str] = None
    address: Optional[Address] = None
    contact_info: Optional[ContactInfo] = None
    primary_contact: Optional[Contact] = None
    technical_contact: Optional[Contact] = None
    departments: Optional[List[str]] = None
    operating_hours: Optional[OperatingHours] = None
    notes: Optional[str] = None
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None


class DeviceCountUpdate(CamelModel):
    count: int = Field(..., ge=0)


class LastVisitUpdate(CamelModel):
    visit_date: date


class DepartmentIn(CamelModel):
    department: str = Field(..., min_length=1)


class FacilityStatusUpdate(CamelModel):
    status: FacilityStatus
