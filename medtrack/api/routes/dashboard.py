from fastapi import APIRouter, Depends

from medtrack.api.deps import get_store
from medtrack.services import dashboard_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["dashboard"])


@router.get("/")
def get_dashboard(store: AppStore = Depends(get_store)):
    return dashboard_service.summary(store.state)
