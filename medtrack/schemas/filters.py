from datetime import date
from typing import Optional

from medtrack.schemas.common import ALL, CamelModel


class DeviceFilters(CamelModel):
    search_term: str = ""
    status: str = ALL
    facility: str = ALL


class PhotoLogFilters(CamelModel):
    search_term: str = ""
    device_id: str = ALL
    category: str = ALL
    alert_level: str = ALL
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ContractFilters(CamelModel):
    search_term: str = ""
    status: str = ALL
    type: str = ALL


class ServiceVisitFilters(CamelModel):
    search_term: str = ""
    status: str = ALL
    purpose: str = ALL
    device_id: str = ALL
