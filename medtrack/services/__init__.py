from medtrack.services import (
    contract_service,
    dashboard_service,
    device_service,
    export_service,
    facility_service,
    installation_service,
    photo_log_service,
    service_visit_service,
    validation,
)

__all__ = [
    "contract_service",
    "dashboard_service",
    "device_service",
    "export_service",
    "facility_service",
    "installation_service",
    "photo_log_service",
    "service_visit_service",
    "validation",
]
