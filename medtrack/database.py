"""
Database engine and session factory for the state snapshot store.
SQLite locally; any SQLAlchemy URL via DATABASE_URL.
"""
import logging

from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from medtrack.core.config import settings
from medtrack.db.base import Base

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    """Create an engine; SQLite connections are shared across the request threadpool."""
    return create_engine(
        url,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
        echo=False,
        pool_pre_ping=True,
    )


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(settings.DATABASE_URL)


def check_connection(bind: Engine = None) -> bool:
    """Test database connection - NON-BLOCKING."""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except Exception as e:
        logger.warning(f"[DB] Connection check failed (continuing): {e}")
        return False


def init_db(bind: Engine = None) -> bool:
    """Create tables - NON-BLOCKING."""
    # Import models so they're registered with Base
    from medtrack.models.snapshot import StateSnapshot  # noqa: F401

    try:
        Base.metadata.create_all(bind=bind or engine)
        return True
    except Exception as e:
        logger.warning(f"[DB] Table creation failed: {e}")
        return False


def close_db_connection() -> None:
    """Close database connections."""
    engine.dispose()
    logger.info("[DB] Connections closed")
