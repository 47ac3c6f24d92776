"""
Shared route dependencies.
"""
import threading
from typing import Optional, TypeVar

from fastapi import HTTPException, Request, status

from medtrack.services.storage_service import StateStorage
from medtrack.services.store import AppStore

T = TypeVar("T")

_store_lock = threading.Lock()


def get_store(request: Request) -> AppStore:
    """The process-wide store, loaded from storage on first use."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        with _store_lock:
            store = getattr(request.app.state, "store", None)
            if store is None:
                store = AppStore.load(StateStorage())
                request.app.state.store = store
    return store


def get_or_404(record: Optional[T], label: str) -> T:
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return record
