from medtrack.api.routes.contracts import router as contracts_router
from medtrack.api.routes.dashboard import router as dashboard_router
from medtrack.api.routes.devices import router as devices_router
from medtrack.api.routes.export import router as export_router
from medtrack.api.routes.facilities import router as facilities_router
from medtrack.api.routes.installations import router as installations_router
from medtrack.api.routes.photo_logs import router as photo_logs_router
from medtrack.api.routes.service_visits import router as service_visits_router

__all__ = [
    "contracts_router",
    "dashboard_router",
    "devices_router",
    "export_router",
    "facilities_router",
    "installations_router",
    "photo_logs_router",
    "service_visits_router",
]
