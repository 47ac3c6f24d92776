from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field

from medtrack.schemas.common import CamelModel, FileRef, new_id


class ContractType(str, Enum):
    AMC = "AMC"
    CMC = "CMC"


class ContractStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


class ServiceFrequency(str, Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    SEMI_ANNUAL = "Semi-Annual"
    ANNUAL = "Annual"


CURRENCIES = ["USD", "EUR", "GBP", "INR"]


class Contract(CamelModel):
    id: str = Field(default_factory=new_id)
    contract_number: str
    type: ContractType
    device_id: str
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    start_date: date
    end_date: date
    status: ContractStatus = ContractStatus.ACTIVE
    value: float = 0
    currency: str = "USD"
    service_frequency: Optional[ServiceFrequency] = None
    next_service_date: Optional[date] = None
    services_included: List[str] = []
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    vendor: Optional[str] = None
    vendor_contact: Optional[str] = None
    notes: Optional[str] = None
    documents: List[FileRef] = []
    renewal_notified: bool = False
    auto_renewal: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ─────────────────────── Request payloads ───────────────────────

class ContractCreate(CamelModel):
    contract_number: Optional[str] = None
    type: Optional[str] = None
    device_id: Optional[str] = None
    device_type: Optional[str] = None
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    value: Optional[Any] = None
    currency: Optional[str] = "USD"
    service_frequency: Optional[str] = None
    next_service_date: Optional[str] = None
    services_included: List[str] = []
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    vendor: Optional[str] = None
    vendor_contact: Optional[str] = None
    notes: Optional[str] = None
    auto_renewal: bool = False


class ContractUpdate(ContractCreate):
    currency: Optional[str] = None
    services_included: Optional[List[str]] = None
    auto_renewal: Optional[bool] = None


class ContractRenewal(CamelModel):
    new_end_date: date
    new_value: Optional[float] = Field(None, ge=0)


class ContractStatusUpdate(CamelModel):
    status: ContractStatus
