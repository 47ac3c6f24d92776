"""
The application state tree: six independent collections, persisted as one
document with the keys devices, installations, serviceVisits, contracts,
photoLogs and facilities.
"""
from typing import List

from medtrack.schemas.common import CamelModel
from medtrack.schemas.contract import Contract
from medtrack.schemas.device import Device
from medtrack.schemas.facility import Facility
from medtrack.schemas.installation import Installation
from medtrack.schemas.photo_log import PhotoLog
from medtrack.schemas.service_visit import ServiceVisit

COLLECTIONS = (
    "devices",
    "installations",
    "service_visits",
    "contracts",
    "photo_logs",
    "facilities",
)


class AppState(CamelModel):
    devices: List[Device] = []
    installations: List[Installation] = []
    service_visits: List[ServiceVisit] = []
    contracts: List[Contract] = []
    photo_logs: List[PhotoLog] = []
    facilities: List[Facility] = []
