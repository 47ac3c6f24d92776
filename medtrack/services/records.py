"""
Collection helpers shared by the reducers and selectors.

Reducers never mutate: they return a new list, with changed records rebuilt
through model validation so typed fields stay typed.
"""
import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, TypeVar

from pydantic import BaseModel

from medtrack.schemas.common import ALL, utcnow

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def find_by_id(items: Sequence[M], item_id: str) -> Optional[M]:
    return next((item for item in items if item.id == item_id), None)


def replace_by_id(items: Sequence[M], item_id: str, change: Callable[[M], M]) -> List[M]:
    """Apply *change* to the record with *item_id*; unknown ids leave the list as is."""
    result = list(items)
    for index, item in enumerate(result):
        if item.id == item_id:
            result[index] = change(item)
            return result
    logger.debug(f"[RECORDS] No record with id '{item_id}'")
    return result


def remove_by_id(items: Sequence[M], item_id: str) -> List[M]:
    return [item for item in items if item.id != item_id]


def apply_updates(record: M, updates: Mapping[str, Any], touch: bool = True) -> M:
    """Merge *updates* (snake_case keys) into *record*; the id is never replaced."""
    data = record.model_dump()
    data.update({key: value for key, value in updates.items() if key != "id"})
    if touch and "updated_at" in type(record).model_fields:
        data["updated_at"] = utcnow()
    return type(record).model_validate(data)


# ─────────────────────── Filter predicates ───────────────────────

def matches_search(term: Optional[str], *fields: Any) -> bool:
    """Case-insensitive substring match against any field; lists are searched item by item."""
    if not term:
        return True
    needle = term.lower()
    for field in fields:
        values: Iterable[Any] = field if isinstance(field, (list, tuple)) else [field]
        for value in values:
            if value is not None and needle in str(value).lower():
                return True
    return False


def matches_choice(selected: Optional[str], value: Any) -> bool:
    """Exact match unless the filter holds the ALL sentinel."""
    if selected in (None, ALL):
        return True
    return value == selected


def in_date_range(value: Optional[Any], start: Optional[date], end: Optional[date]) -> bool:
    """Inclusive calendar-date bounds, applied only when both are set."""
    if start is None or end is None:
        return True
    if value is None:
        return False
    day = value.date() if isinstance(value, datetime) else value
    return start <= day <= end
