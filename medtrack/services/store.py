"""
Application store.

Holds the current AppState and applies one intent at a time: the reducer
produces the next collection, the store swaps it in and persists the whole
state. A reducer that raises leaves the state as it was.
"""
import logging
import threading
from datetime import date
from typing import Any, Callable, Optional

from medtrack.core.config import settings
from medtrack.schemas.state import COLLECTIONS, AppState
from medtrack.services import contract_service
from medtrack.services.storage_service import StateStorage

logger = logging.getLogger(__name__)


def reduce_state(state: AppState, collection: str, reducer: Callable, *args: Any, **kwargs: Any) -> AppState:
    """Return a new state with *collection* replaced by the reducer's result."""
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'")
    updated = reducer(getattr(state, collection), *args, **kwargs)
    return state.model_copy(update={collection: updated})


def default_state() -> AppState:
    if settings.SEED_DEMO_DATA:
        from medtrack.seed import demo_state

        return demo_state()
    return AppState()


class AppStore:
    def __init__(self, storage: Optional[StateStorage] = None, state: Optional[AppState] = None):
        self.storage = storage
        self._state = state if state is not None else AppState()
        self._lock = threading.Lock()

    @classmethod
    def load(cls, storage: Optional[StateStorage] = None, today: Optional[date] = None) -> "AppStore":
        """Start from the saved snapshot, or the default state, with contract statuses refreshed."""
        state = storage.load() if storage is not None else None
        if state is None:
            logger.info("[STORE] Starting from default state")
            state = default_state()
        state = state.model_copy(
            update={"contracts": contract_service.refresh_statuses(state.contracts, today)}
        )
        return cls(storage=storage, state=state)

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, collection: str, reducer: Callable, *args: Any, **kwargs: Any) -> AppState:
        with self._lock:
            self._state = reduce_state(self._state, collection, reducer, *args, **kwargs)
            if self.storage is not None and not self.storage.save(self._state):
                logger.warning(f"[STORE] {reducer.__name__} applied but not persisted")
            return self._state

    def refresh_contract_statuses(self, today: Optional[date] = None) -> AppState:
        return self.dispatch("contracts", contract_service.refresh_statuses, today)
