"""
Snapshot persistence.

The whole application state is stored as one JSON document (camelCase keys)
in the state_snapshots table under settings.STATE_KEY. Loading never raises:
a missing or unreadable snapshot yields None. Saving never raises either; a
failed write is logged and reported as False.
"""
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from medtrack.core.config import settings
from medtrack.database import build_session_factory, engine as default_engine, init_db
from medtrack.models.snapshot import StateSnapshot
from medtrack.schemas.state import AppState

logger = logging.getLogger(__name__)


class StateStorage:
    def __init__(self, engine: Optional[Engine] = None, key: Optional[str] = None):
        self.engine = engine or default_engine
        self.key = key or settings.STATE_KEY
        self.session_factory = build_session_factory(self.engine)
        init_db(self.engine)

    def load(self) -> Optional[AppState]:
        session = None
        try:
            session = self.session_factory()
            snapshot = session.get(StateSnapshot, self.key)
            if snapshot is None:
                logger.info(f"[STORAGE] No saved state under '{self.key}'")
                return None
            state = AppState.model_validate_json(snapshot.payload)
            logger.info(f"[STORAGE] Loaded state '{self.key}'")
            return state
        except SQLAlchemyError as e:
            logger.warning(f"[STORAGE] Could not read saved state: {e}")
            return None
        except ValidationError as e:
            logger.warning(f"[STORAGE] Saved state is corrupt, ignoring it: {e.error_count()} error(s)")
            return None
        finally:
            if session is not None:
                session.close()

    def save(self, state: AppState) -> bool:
        session = None
        try:
            session = self.session_factory()
            payload = state.model_dump_json(by_alias=True)
            snapshot = session.get(StateSnapshot, self.key)
            if snapshot is None:
                session.add(StateSnapshot(key=self.key, payload=payload))
            else:
                snapshot.payload = payload
            session.commit()
            return True
        except SQLAlchemyError as e:
            if session is not None:
                session.rollback()
            logger.error(f"[STORAGE] Failed to save state: {e}")
            return False
        finally:
            if session is not None:
                session.close()
