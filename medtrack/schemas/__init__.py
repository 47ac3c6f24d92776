from medtrack.schemas.common import ALL, CamelModel, FileRef
from medtrack.schemas.contract import Contract, ContractStatus, ContractType
from medtrack.schemas.device import Device, DeviceStatus
from medtrack.schemas.facility import Facility
from medtrack.schemas.installation import Installation, InstallationChecklist, InstallationStatus
from medtrack.schemas.photo_log import AlertLevel, PhotoCategory, PhotoLog
from medtrack.schemas.service_visit import ServiceVisit, VisitPurpose, VisitStatus
from medtrack.schemas.state import COLLECTIONS, AppState

__all__ = [
    "ALL",
    "CamelModel",
    "FileRef",
    "Contract",
    "ContractStatus",
    "ContractType",
    "Device",
    "DeviceStatus",
    "Facility",
    "Installation",
    "InstallationChecklist",
    "InstallationStatus",
    "AlertLevel",
    "PhotoCategory",
    "PhotoLog",
    "ServiceVisit",
    "VisitPurpose",
    "VisitStatus",
    "COLLECTIONS",
    "AppState",
]
