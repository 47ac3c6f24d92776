"""
CSV download of a single collection.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from medtrack.api.deps import get_store
from medtrack.services import export_service
from medtrack.services.store import AppStore

router = APIRouter(tags=["export"])
logger = logging.getLogger(__name__)


@router.get("/{collection}")
def export_collection(collection: str, store: AppStore = Depends(get_store)):
    """Download devices, installations, service-visits, contracts, photo-logs or facilities as CSV."""
    name = collection.replace("-", "_")
    if name not in export_service.EXPORTS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown collection '{collection}'")

    content = export_service.export_collection(store.state, name)
    filename = export_service.export_filename(name)
    logger.info(f"[EXPORT] {name} -> {filename}")
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/")
def export_all(store: AppStore = Depends(get_store)):
    """Write one CSV per non-empty collection into the configured export directory."""
    paths = export_service.export_all(store.state)
    return {"success": True, "files": [str(path) for path in paths]}
