"""
Shared schema pieces: camelCase wire names, ids, timestamps and file references.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Sentinel used by every categorical filter to mean "no filter"
ALL = "All"


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Python attributes in snake_case, persisted/JSON keys in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileRef(CamelModel):
    """Photo, attachment or document attached to a record."""
    id: str = Field(default_factory=new_id)
    filename: str
    description: Optional[str] = None
    upload_date: Optional[datetime] = None


class FileRefIn(CamelModel):
    filename: str = Field(..., min_length=1)
    description: Optional[str] = None
