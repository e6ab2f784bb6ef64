"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from urban_insights.models import PropertyRecord


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a flat dataclass without the deep copy ``asdict`` makes."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def record_to_row(record: PropertyRecord) -> dict[str, Any]:
    """One CSV row for a record, keyed in declared field order."""
    return dataclass_to_dict(record)


def serialize_value(value: Any) -> Any:
    """Serialize a value for tabular output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
