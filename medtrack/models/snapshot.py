from sqlalchemy import Column, String, Text

from medtrack.db.base import Base, TimestampMixin


class StateSnapshot(Base, TimestampMixin):
    """The whole application state serialized as one JSON document."""
    __tablename__ = "state_snapshots"

    key = Column(String(100), primary_key=True)
    payload = Column(Text, nullable=False)
