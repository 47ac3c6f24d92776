"""
Service visit routes: scheduling, work log, parts, files and sign-off.
"""
import logging

from fastapi import APIRouter, Depends, Query, status

from medtrack.api.deps import get_or_404, get_store
from medtrack.schemas.common import ALL, FileRefIn
from medtrack.schemas.filters import ServiceVisitFilters
from medtrack.schemas.service_visit import (
    PartUsed,
    ServiceVisitCreate,
    ServiceVisitUpdate,
    VisitCompletion,
    WorkItem,
)
from medtrack.services import service_visit_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["service-visits"])
logger = logging.getLogger(__name__)


def _visit_or_404(store: AppStore, visit_id: str):
    return get_or_404(service_visit_service.get_service_visit(store.state.service_visits, visit_id), "Service visit")


def _dispatch(store: AppStore, reducer, visit_id: str, *args):
    _visit_or_404(store, visit_id)
    state = store.dispatch("service_visits", reducer, visit_id, *args)
    return service_visit_service.get_service_visit(state.service_visits, visit_id)


@router.get("/")
def list_service_visits(
    search: str = "",
    status_filter: str = Query(ALL, alias="status"),
    purpose: str = ALL,
    device_id: str = ALL,
    store: AppStore = Depends(get_store),
):
    filters = ServiceVisitFilters(search_term=search, status=status_filter, purpose=purpose, device_id=device_id)
    return service_visit_service.filter_visits(store.state.service_visits, filters)


@router.get("/pending")
def list_pending_visits(store: AppStore = Depends(get_store)):
    return service_visit_service.pending_visits(store.state.service_visits)


@router.get("/{visit_id}")
def get_service_visit(visit_id: str, store: AppStore = Depends(get_store)):
    return _visit_or_404(store, visit_id)


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_service_visit(visit_in: ServiceVisitCreate, store: AppStore = Depends(get_store)):
    visit = service_visit_service.build_service_visit(visit_in.model_dump())
    store.dispatch("service_visits", service_visit_service.add_service_visit, visit)
    return visit


@router.put("/{visit_id}")
def update_service_visit(visit_id: str, visit_in: ServiceVisitUpdate, store: AppStore = Depends(get_store)):
    return _dispatch(
        store, service_visit_service.edit_service_visit, visit_id, visit_in.model_dump(exclude_unset=True)
    )


@router.post("/{visit_id}/work")
def add_work_performed(visit_id: str, payload: WorkItem, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.add_work_performed, visit_id, payload.work)


@router.delete("/{visit_id}/work/{index}")
def remove_work_performed(visit_id: str, index: int, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.remove_work_performed, visit_id, index)


@router.post("/{visit_id}/parts")
def add_part_used(visit_id: str, part: PartUsed, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.add_part_used, visit_id, part.model_dump())


@router.delete("/{visit_id}/parts/{index}")
def remove_part_used(visit_id: str, index: int, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.remove_part_used, visit_id, index)


@router.post("/{visit_id}/photos")
def add_service_photo(visit_id: str, photo_in: FileRefIn, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.add_service_photo, visit_id, photo_in.model_dump())


@router.delete("/{visit_id}/photos/{photo_id}")
def remove_service_photo(visit_id: str, photo_id: str, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.remove_service_photo, visit_id, photo_id)


@router.post("/{visit_id}/attachments")
def add_service_attachment(visit_id: str, attachment_in: FileRefIn, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.add_service_attachment, visit_id, attachment_in.model_dump())


@router.delete("/{visit_id}/attachments/{attachment_id}")
def remove_service_attachment(visit_id: str, attachment_id: str, store: AppStore = Depends(get_store)):
    return _dispatch(store, service_visit_service.remove_service_attachment, visit_id, attachment_id)


@router.post("/{visit_id}/complete")
def complete_service_visit(visit_id: str, payload: VisitCompletion, store: AppStore = Depends(get_store)):
    return _dispatch(
        store,
        service_visit_service.complete_service_visit,
        visit_id,
        payload.customer_signature,
        payload.completion_notes,
    )


@router.delete("/{visit_id}")
def delete_service_visit(visit_id: str, store: AppStore = Depends(get_store)):
    _visit_or_404(store, visit_id)
    store.dispatch("service_visits", service_visit_service.delete_service_visit, visit_id)
    return {"success": True, "message": "Service visit deleted"}
