"""
Dashboard overview figures derived from the whole state.
"""
from datetime import date
from typing import Any, Dict, List

from medtrack.schemas.state import AppState
from medtrack.services import (
    contract_service,
    device_service,
    installation_service,
    photo_log_service,
    service_visit_service,
)


def recent_activities(state: AppState, limit: int = 5) -> List[Dict[str, Any]]:
    """First three service visits and first two installations, newest first."""
    activities = [
        {
            "type": "Service Visit",
            "description": f"{visit.purpose.value} maintenance on {visit.device_type or 'Unknown Device'}",
            "date": visit.visit_date,
            "facility": visit.facility_name or "Unknown Facility",
            "status": visit.status.value,
        }
        for visit in state.service_visits[:3]
    ] + [
        {
            "type": "Installation",
            "description": f"{installation.device_type or 'Unknown Device'} installation",
            "date": installation.installation_date,
            "facility": installation.facility_name or "Unknown Facility",
            "status": installation.status.value,
        }
        for installation in state.installations[:2]
    ]
    activities.sort(key=lambda activity: activity["date"] or date.min, reverse=True)
    return activities[:limit]


def summary(state: AppState) -> Dict[str, Any]:
    return {
        "devices": {
            "total": len(state.devices),
            "by_status": device_service.status_counts(state.devices),
            "average_battery_level": device_service.average_battery_level(state.devices),
        },
        "installations": {
            "total": len(state.installations),
            "pending": len(installation_service.pending_installations(state.installations)),
        },
        "service_visits": {
            "total": len(state.service_visits),
            "pending": len(service_visit_service.pending_visits(state.service_visits)),
        },
        "contracts": {
            "total": len(state.contracts),
            "by_status": contract_service.status_counts(state.contracts),
            "needing_renewal": len(contract_service.contracts_needing_renewal(state.contracts)),
        },
        "alert_photos": len(photo_log_service.alert_photos(state.photo_logs)),
        "recent_activities": recent_activities(state),
    }
